"""Resistor network representation.

A network is an immutable tree whose nodes are one of three kinds: a single
resistor (LEAF), a series arrangement (SERIES) or a parallel arrangement
(PARALLEL). Combination operations always build new trees; existing nodes are
never modified, so subtrees can be shared freely between networks.
"""

import functools
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import Any, Dict, Iterator, Optional, Sequence, Tuple

OHM_SYMBOL = "Ω"


class NodeKind(Enum):
    """Variants of the network tagged union."""
    LEAF = 0
    SERIES = 1
    PARALLEL = 2


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Network:
    """Immutable resistor network node.

    Equality is structural: same kind, and for leaves the same label, for
    composites the same children in the same order. Ordering follows the
    search cost: fewer resistors first, then lower resistance.
    """
    kind: NodeKind
    children: Tuple['Network', ...] = ()
    value: float = 0.0
    label: str = ""

    def __post_init__(self) -> None:
        """Validate node shape."""
        object.__setattr__(self, 'children', tuple(self.children))
        if self.kind is NodeKind.LEAF:
            if self.children:
                raise ValueError("Leaf network cannot have children")
        elif len(self.children) < 2:
            raise ValueError(
                f"{self.kind.name.title()} network needs at least 2 children, "
                f"got {len(self.children)}"
            )

    @classmethod
    def leaf(cls, value: float, label: Optional[str] = None) -> 'Network':
        """Create a single resistor node."""
        if label is None:
            label = f"{value:g}"
        return cls(NodeKind.LEAF, (), float(value), label)

    @classmethod
    def series(cls, children: Sequence['Network']) -> 'Network':
        return cls(NodeKind.SERIES, tuple(children))

    @classmethod
    def parallel(cls, children: Sequence['Network']) -> 'Network':
        return cls(NodeKind.PARALLEL, tuple(children))

    @property
    def is_leaf(self) -> bool:
        return self.kind is NodeKind.LEAF

    @property
    def is_series(self) -> bool:
        return self.kind is NodeKind.SERIES

    @property
    def is_parallel(self) -> bool:
        return self.kind is NodeKind.PARALLEL

    @cached_property
    def _resistance(self) -> float:
        if self.kind is NodeKind.LEAF:
            return self.value
        if self.kind is NodeKind.SERIES:
            return sum(child.resistance() for child in self.children)
        if self.kind is NodeKind.PARALLEL:
            return 1.0 / sum(1.0 / child.resistance() for child in self.children)
        raise ValueError(f"Unknown network kind: {self.kind}")

    def resistance(self) -> float:
        """Equivalent resistance in ohms.

        Series nodes add their children's resistances; parallel nodes take the
        reciprocal of the summed reciprocals.
        """
        return self._resistance

    @cached_property
    def _leaf_count(self) -> int:
        if self.kind is NodeKind.LEAF:
            return 1
        return sum(child.total_leaf_count() for child in self.children)

    def total_leaf_count(self) -> int:
        """Number of resistors in the network."""
        return self._leaf_count

    @cached_property
    def structural_key(self) -> Tuple:
        """Nested tuple identifying the tree up to structural equality."""
        if self.kind is NodeKind.LEAF:
            return (NodeKind.LEAF.value, self.label)
        return (self.kind.value, tuple(child.structural_key for child in self.children))

    @cached_property
    def sort_key(self) -> Tuple[int, float, Tuple]:
        """Priority key: leaf count, then resistance, then structure."""
        return (self.total_leaf_count(), self.resistance(), self.structural_key)

    @cached_property
    def _hash(self) -> int:
        return hash(self.structural_key)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return self is other or self.structural_key == other.structural_key

    def compare(self, other: 'Network') -> int:
        """Three-way comparison: -1, 0 or 1.

        Equal networks compare 0 regardless of anything else; otherwise the
        cheaper network (fewer leaves, then lower resistance) sorts first and
        the structural key settles the remaining ties.
        """
        if self == other:
            return 0
        return -1 if self.sort_key < other.sort_key else 1

    def __lt__(self, other: 'Network') -> bool:
        if not isinstance(other, Network):
            return NotImplemented
        return self.compare(other) < 0

    def leaves(self) -> Iterator['Network']:
        """Iterate over leaf nodes, left to right."""
        if self.kind is NodeKind.LEAF:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def leaf_usage_summary(self) -> Dict[str, int]:
        """Count how many times each resistor label is used."""
        counts: Dict[str, int] = {}
        for node in self.leaves():
            counts[node.label] = counts.get(node.label, 0) + 1
        return counts

    def __str__(self) -> str:
        return render_network(self)


def leaf(value: float, label: Optional[str] = None) -> Network:
    """Shorthand for :meth:`Network.leaf`."""
    return Network.leaf(value, label)


def series(*children: Network) -> Network:
    return Network.series(children)


def parallel(*children: Network) -> Network:
    return Network.parallel(children)


def _combine(kind: NodeKind, a: Network, b: Network) -> Network:
    # Operands of the same kind are spliced in place instead of nested
    children = []
    for operand in (a, b):
        if operand.kind is kind:
            children.extend(operand.children)
        else:
            children.append(operand)
    return Network(kind, tuple(children))


def combine_series(a: Network, b: Network) -> Network:
    """Connect two networks in series, flattening series operands."""
    return _combine(NodeKind.SERIES, a, b)


def combine_parallel(a: Network, b: Network) -> Network:
    """Connect two networks in parallel, flattening parallel operands."""
    return _combine(NodeKind.PARALLEL, a, b)


def render_network(network: Network) -> str:
    """Render a network as ``Series[...]``, ``Parallel[...]`` and ``<label>Ω``."""
    if network.kind is NodeKind.LEAF:
        return f"{network.label}{OHM_SYMBOL}"
    inner = ", ".join(render_network(child) for child in network.children)
    return f"{network.kind.name.title()}[{inner}]"


def network_to_dict(network: Network) -> Dict[str, Any]:
    """Convert a network to a JSON-serialisable dictionary."""
    if network.kind is NodeKind.LEAF:
        return {'kind': 'leaf', 'label': network.label, 'value': network.value}
    return {
        'kind': network.kind.name.lower(),
        'resistance': network.resistance(),
        'children': [network_to_dict(child) for child in network.children],
    }
