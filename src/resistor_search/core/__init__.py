"""Core data types for resistor network search.

This module provides the immutable network tree, its equivalence strategies,
and catalogue parsing.
"""

from .network import (
    Network, NodeKind, leaf, series, parallel, combine_series, combine_parallel,
    render_network, network_to_dict
)
from .equivalence import structural_key, canonical_key, get_equivalence_strategy
from .catalogue import (
    InvalidValueError, parse_value, parse_catalogue, validate_catalogue, e_series_catalogue
)

__all__ = [
    'Network',
    'NodeKind',
    'leaf',
    'series',
    'parallel',
    'combine_series',
    'combine_parallel',
    'render_network',
    'network_to_dict',
    'structural_key',
    'canonical_key',
    'get_equivalence_strategy',
    'InvalidValueError',
    'parse_value',
    'parse_catalogue',
    'validate_catalogue',
    'e_series_catalogue'
]
