"""Equivalence strategies used to deduplicate generated networks.

A strategy maps a network to a hashable key; two networks with the same key
are treated as the same candidate by the searcher.
"""

from typing import Callable, Dict, Hashable, Tuple, Union

from .network import Network, NodeKind

EquivalenceKey = Callable[[Network], Hashable]


def structural_key(network: Network) -> Tuple:
    """Key under which child order is significant."""
    return network.structural_key


def canonical_key(network: Network) -> Tuple:
    """Key that ignores the order of children within each composite node.

    ``Series[a, b]`` and ``Series[b, a]`` share a canonical key. Different
    groupings such as ``Series[Series[a, b], c]`` and ``Series[a, b, c]``
    still differ.
    """
    if network.kind is NodeKind.LEAF:
        return (NodeKind.LEAF.value, network.label)
    return (network.kind.value, tuple(sorted(canonical_key(child) for child in network.children)))


EQUIVALENCE_STRATEGIES: Dict[str, EquivalenceKey] = {
    'structural': structural_key,
    'canonical': canonical_key,
}


def get_equivalence_strategy(strategy: Union[str, EquivalenceKey]) -> EquivalenceKey:
    """Resolve a strategy name or pass a custom key function through.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if callable(strategy):
        return strategy
    try:
        return EQUIVALENCE_STRATEGIES[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown equivalence strategy {strategy!r}, "
            f"expected one of {sorted(EQUIVALENCE_STRATEGIES)}"
        ) from None
