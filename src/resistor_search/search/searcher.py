"""Best-first search over resistor networks.

This module implements the searcher that explores series/parallel
arrangements of catalogue resistors, cheapest (fewest resistors) first, until
one lands within the threshold of the target resistance.
"""

import heapq
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Sequence, Set, Union

from resistor_search.core.catalogue import CatalogueEntry, parse_value, validate_catalogue
from resistor_search.core.equivalence import EquivalenceKey, get_equivalence_strategy
from resistor_search.core.network import (
    Network, NodeKind, combine_parallel, combine_series, render_network
)

logger = logging.getLogger(__name__)

# Termination reasons that mean "gave up", as opposed to "proved empty"
BUDGET_REASONS = frozenset({'max_nodes_reached', 'max_explored_reached', 'timeout', 'cancelled'})


class CancellationToken:
    """Cooperative cancellation flag, safe to set from another thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class SearchConfig:
    """Budget and policy for a single search.

    A limit of ``None`` disables it; with every limit disabled an unreachable
    target makes the search run until memory runs out.
    """
    max_nodes_expanded: Optional[int] = 100_000
    max_explored: Optional[int] = 1_000_000
    max_computation_time: Optional[float] = 30.0  # seconds
    equivalence: str = 'structural'


@dataclass
class SearchStatistics:
    """Counters collected while searching."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    duplicate_states: int = 0
    max_frontier_size: int = 0
    explored_size: int = 0
    average_branching_factor: float = 0.0

    def update_branching_factor(self, total_successors: int) -> None:
        """Update average branching factor."""
        if self.nodes_expanded > 0:
            self.average_branching_factor = (
                (self.average_branching_factor * (self.nodes_expanded - 1) + total_successors)
                / self.nodes_expanded
            )
        else:
            self.average_branching_factor = total_successors

    def to_dict(self) -> Dict[str, Any]:
        return {
            'nodes_expanded': self.nodes_expanded,
            'nodes_generated': self.nodes_generated,
            'duplicate_states': self.duplicate_states,
            'max_frontier_size': self.max_frontier_size,
            'explored_size': self.explored_size,
            'average_branching_factor': self.average_branching_factor
        }


@dataclass
class SearchResult:
    """Outcome of a search."""
    success: bool
    network: Optional[Network] = None
    target: float = 0.0
    threshold: float = 0.0
    nodes_expanded: int = 0
    nodes_generated: int = 0
    computation_time: float = 0.0
    termination_reason: str = "unknown"
    statistics: Optional[Dict[str, Any]] = None

    @property
    def resistance(self) -> Optional[float]:
        return self.network.resistance() if self.network is not None else None

    @property
    def error(self) -> Optional[float]:
        """Absolute deviation of the found network from the target."""
        if self.network is None:
            return None
        return abs(self.network.resistance() - self.target)

    @property
    def budget_exhausted(self) -> bool:
        """True when the search stopped on a limit rather than finishing."""
        return self.termination_reason in BUDGET_REASONS

    @property
    def unsatisfiable(self) -> bool:
        """True when every candidate was examined without a match."""
        return self.termination_reason == 'search_exhausted'


class ResistorSearcher:
    """Best-first searcher with closed-on-generation duplicate detection."""

    def __init__(self,
                 target: float,
                 threshold: float,
                 available: Sequence[CatalogueEntry],
                 config: Optional[SearchConfig] = None,
                 equivalence: Optional[Union[str, EquivalenceKey]] = None):
        """Initialize searcher.

        Args:
            target: Target resistance in ohms
            threshold: Absolute tolerance in ohms
            available: Catalogue of ``(label, value)`` entries
            config: Search budget; defaults to :class:`SearchConfig`
            equivalence: Strategy name or key function overriding
                ``config.equivalence``

        Raises:
            InvalidValueError: If target, threshold or a catalogue entry is invalid
        """
        self.config = config or SearchConfig()
        self.target = parse_value(target, name="target")
        self.threshold = parse_value(threshold, name="threshold")
        self.available = validate_catalogue(available)
        self.equivalence_key = get_equivalence_strategy(
            equivalence if equivalence is not None else self.config.equivalence
        )

        self._resistors = [Network.leaf(value, label) for label, value in self.available]
        self.frontier: List[Network] = []
        self.explored: Set[Hashable] = set()
        self.statistics = SearchStatistics()

        logger.debug(f"Searcher initialized: target={self.target}, threshold={self.threshold}, "
                     f"catalogue={[label for label, _ in self.available]}")

    def reset(self) -> None:
        """Discard the frontier, explored set and statistics."""
        self.frontier = []
        self.explored = set()
        self.statistics = SearchStatistics()

    def goal_test(self, network: Network) -> bool:
        return abs(network.resistance() - self.target) < self.threshold

    def push_candidate(self, network: Network) -> bool:
        """Add a network to the frontier unless an equivalent one was seen.

        The network is marked explored as soon as it is pushed, so duplicates
        never reach the frontier.

        Returns:
            True if the network was pushed
        """
        key = self.equivalence_key(network)
        if key in self.explored:
            self.statistics.duplicate_states += 1
            return False

        self.explored.add(key)
        heapq.heappush(self.frontier, network)
        self.statistics.nodes_generated += 1
        if len(self.frontier) > self.statistics.max_frontier_size:
            self.statistics.max_frontier_size = len(self.frontier)
        return True

    def expand(self, network: Network) -> List[Network]:
        """Generate successor networks.

        For every catalogue resistor the whole network gets it added in series
        and in parallel. Composite networks additionally get ladder variants:
        one child is kept as-is while every other child is combined with the
        resistor using the opposite connection.
        """
        successors: List[Network] = []
        for resistor in self._resistors:
            successors.append(combine_series(network, resistor))
            successors.append(combine_parallel(network, resistor))

            if network.kind is NodeKind.SERIES:
                successors.extend(self._ladder_variants(network, resistor, combine_parallel))
            elif network.kind is NodeKind.PARALLEL:
                successors.extend(self._ladder_variants(network, resistor, combine_series))

        return successors

    def _ladder_variants(self, network: Network, resistor: Network,
                         combine: Callable[[Network, Network], Network]) -> Iterator[Network]:
        children = network.children
        for keep in range(len(children)):
            yield Network(network.kind, tuple(
                child if index == keep else combine(child, resistor)
                for index, child in enumerate(children)
            ))

    def _budget_reason(self) -> Optional[str]:
        max_expanded = self.config.max_nodes_expanded
        if max_expanded is not None and self.statistics.nodes_expanded >= max_expanded:
            return 'max_nodes_reached'
        max_explored = self.config.max_explored
        if max_explored is not None and len(self.explored) >= max_explored:
            return 'max_explored_reached'
        return None

    def search(self, cancel_token: Optional[CancellationToken] = None) -> SearchResult:
        """Search for a network within the threshold of the target.

        Args:
            cancel_token: Optional token checked once per iteration

        Returns:
            SearchResult; ``termination_reason`` is ``goal_reached`` on
            success, ``search_exhausted`` if the frontier emptied, or one of
            the budget reasons otherwise
        """
        start_time = time.perf_counter()
        self.reset()

        max_time = self.config.max_computation_time
        deadline = start_time + max_time if max_time is not None else None

        logger.info(f"Starting search: target={self.target}, threshold={self.threshold}, "
                    f"{len(self._resistors)} catalogue values")

        for resistor in self._resistors:
            self.push_candidate(resistor)

        termination_reason = 'search_exhausted'
        while self.frontier:
            if cancel_token is not None and cancel_token.cancelled:
                termination_reason = 'cancelled'
                break
            if deadline is not None and time.perf_counter() > deadline:
                termination_reason = 'timeout'
                break

            network = heapq.heappop(self.frontier)

            if self.goal_test(network):
                return self._create_result(network, start_time, 'goal_reached')

            budget_reason = self._budget_reason()
            if budget_reason is not None:
                termination_reason = budget_reason
                break

            successors = self.expand(network)
            self.statistics.nodes_expanded += 1
            self.statistics.update_branching_factor(len(successors))

            for successor in successors:
                self.push_candidate(successor)

            if self.statistics.nodes_expanded % 10_000 == 0:
                logger.debug(f"Expanded {self.statistics.nodes_expanded} networks, "
                             f"frontier={len(self.frontier)}, explored={len(self.explored)}")

        return self._create_result(None, start_time, termination_reason)

    def _create_result(self, network: Optional[Network], start_time: float,
                       termination_reason: str) -> SearchResult:
        computation_time = time.perf_counter() - start_time
        self.statistics.explored_size = len(self.explored)

        if network is not None:
            logger.info(f"Found {render_network(network)} = {network.resistance():.6g} ohm "
                        f"after {self.statistics.nodes_expanded} expansions")
        else:
            logger.info(f"Search stopped without a match: {termination_reason} "
                        f"after {self.statistics.nodes_expanded} expansions")

        return SearchResult(
            success=network is not None,
            network=network,
            target=self.target,
            threshold=self.threshold,
            nodes_expanded=self.statistics.nodes_expanded,
            nodes_generated=self.statistics.nodes_generated,
            computation_time=computation_time,
            termination_reason=termination_reason,
            statistics=self.statistics.to_dict()
        )


def search(target: float,
           threshold: float,
           available: Sequence[CatalogueEntry],
           config: Optional[SearchConfig] = None,
           cancel_token: Optional[CancellationToken] = None,
           equivalence: Optional[Union[str, EquivalenceKey]] = None) -> Optional[Network]:
    """Find a network within ``threshold`` of ``target``.

    None covers both an exhausted search and an exhausted budget; callers
    that need to tell them apart should use :meth:`ResistorSearcher.search`,
    whose result carries ``unsatisfiable`` and ``budget_exhausted``.

    Returns:
        The first matching network, or None
    """
    searcher = ResistorSearcher(target, threshold, available, config=config, equivalence=equivalence)
    return searcher.search(cancel_token=cancel_token).network


def create_searcher(target: float,
                    threshold: float,
                    available: Sequence[CatalogueEntry],
                    max_nodes_expanded: Optional[int] = 100_000,
                    max_explored: Optional[int] = 1_000_000,
                    max_computation_time: Optional[float] = 30.0,
                    equivalence: str = 'structural') -> ResistorSearcher:
    """Factory function to create a searcher with a custom budget."""
    config = SearchConfig(
        max_nodes_expanded=max_nodes_expanded,
        max_explored=max_explored,
        max_computation_time=max_computation_time,
        equivalence=equivalence
    )
    return ResistorSearcher(target, threshold, available, config=config)
