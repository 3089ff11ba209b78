"""Resistor network search.

Finds series/parallel arrangements of available resistor values whose
combined resistance matches a target within a tolerance.
"""

from .core.network import Network, NodeKind, combine_series, combine_parallel, render_network
from .core.catalogue import InvalidValueError, parse_catalogue
from .search.searcher import ResistorSearcher, SearchConfig, SearchResult, CancellationToken, search

__version__ = "0.1.0"

__all__ = [
    'Network',
    'NodeKind',
    'combine_series',
    'combine_parallel',
    'render_network',
    'InvalidValueError',
    'parse_catalogue',
    'ResistorSearcher',
    'SearchConfig',
    'SearchResult',
    'CancellationToken',
    'search'
]
