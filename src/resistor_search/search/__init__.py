"""Search algorithms for resistor networks.

This module implements the best-first searcher that explores series/parallel
arrangements of catalogue resistors.
"""

from .searcher import (
    ResistorSearcher, SearchConfig, SearchResult, SearchStatistics,
    CancellationToken, search, create_searcher
)

__all__ = [
    'ResistorSearcher',
    'SearchConfig',
    'SearchResult',
    'SearchStatistics',
    'CancellationToken',
    'search',
    'create_searcher'
]
