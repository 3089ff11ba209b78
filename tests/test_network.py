"""Tests for the resistor network tree."""

import itertools

import pytest

from resistor_search.core.network import (
    Network, NodeKind, leaf, series, parallel, combine_series, combine_parallel,
    render_network, network_to_dict
)
from resistor_search.core.equivalence import (
    structural_key, canonical_key, get_equivalence_strategy
)


@pytest.fixture
def r100():
    return leaf(100.0, "100")


@pytest.fixture
def r220():
    return leaf(220.0, "220")


@pytest.fixture
def r470():
    return leaf(470.0, "470")


class TestNetworkConstruction:
    """Test node creation and shape validation."""

    def test_leaf_defaults_label_from_value(self):
        node = leaf(4700.0)
        assert node.kind is NodeKind.LEAF
        assert node.label == "4700"
        assert node.value == 4700.0
        assert node.children == ()

    def test_children_stored_as_tuple(self, r100, r220):
        node = Network(NodeKind.SERIES, [r100, r220])
        assert isinstance(node.children, tuple)
        assert node.children == (r100, r220)

    def test_composite_needs_two_children(self, r100):
        with pytest.raises(ValueError):
            series(r100)
        with pytest.raises(ValueError):
            parallel()

    def test_leaf_cannot_have_children(self, r100):
        with pytest.raises(ValueError):
            Network(NodeKind.LEAF, (r100,), 1.0, "1")

    def test_network_is_immutable(self, r100, r220):
        node = series(r100, r220)
        with pytest.raises(AttributeError):
            node.children = (r100,)


class TestResistance:
    """Test resistance laws."""

    def test_leaf_resistance(self, r100):
        assert r100.resistance() == 100.0

    def test_series_resistance_is_sum(self, r100, r220):
        assert series(r100, r220).resistance() == 320.0

    def test_series_resistance_is_not_reciprocal_sum(self, r100, r220):
        # One variant of this algorithm computed series like parallel
        reciprocal_variant = 1.0 / (1.0 / 100.0 + 1.0 / 220.0)
        assert series(r100, r220).resistance() != pytest.approx(reciprocal_variant)

    def test_parallel_resistance(self, r100, r220):
        expected = 1.0 / (1.0 / 100.0 + 1.0 / 220.0)
        assert parallel(r100, r220).resistance() == pytest.approx(expected)

    def test_parallel_of_equal_halves(self, r100):
        assert parallel(r100, r100).resistance() == pytest.approx(50.0)

    @pytest.mark.parametrize("a,b", [(1.0, 1.0), (10.0, 4700.0), (0.5, 1e6)])
    def test_resistance_laws_for_pairs(self, a, b):
        x, y = leaf(a), leaf(b)
        assert series(x, y).resistance() == pytest.approx(a + b)
        assert parallel(x, y).resistance() == pytest.approx(1.0 / (1.0 / a + 1.0 / b))

    def test_nested_network(self, r100, r220, r470):
        node = series(parallel(r100, r100), r220, parallel(r470, r470))
        assert node.resistance() == pytest.approx(50.0 + 220.0 + 235.0)

    def test_leaf_count(self, r100, r220, r470):
        node = series(parallel(r100, r220), r470)
        assert r100.total_leaf_count() == 1
        assert node.total_leaf_count() == 3


class TestCombination:
    """Test series/parallel merging with flattening."""

    def test_combine_two_leaves(self, r100, r220):
        node = combine_series(r100, r220)
        assert node.kind is NodeKind.SERIES
        assert node.children == (r100, r220)

    def test_combine_series_flattens_left(self, r100, r220, r470):
        node = combine_series(series(r100, r220), r470)
        assert node.children == (r100, r220, r470)

    def test_combine_series_flattens_right(self, r100, r220, r470):
        node = combine_series(r100, series(r220, r470))
        assert node.children == (r100, r220, r470)

    def test_combine_series_concatenates_both(self, r100, r220, r470):
        node = combine_series(series(r100, r220), series(r470, r100))
        assert node.children == (r100, r220, r470, r100)

    def test_flattening_is_associative(self, r100, r220, r470):
        left = combine_series(combine_series(r100, r220), r470)
        right = combine_series(r100, combine_series(r220, r470))
        assert left == right
        assert len(left.children) == 3
        assert all(not child.is_series for child in left.children)

    def test_parallel_does_not_flatten_series(self, r100, r220, r470):
        inner = series(r100, r220)
        node = combine_parallel(inner, r470)
        assert node.kind is NodeKind.PARALLEL
        assert node.children == (inner, r470)

    def test_series_does_not_flatten_parallel(self, r100, r220, r470):
        inner = parallel(r100, r220)
        node = combine_series(inner, r470)
        assert node.children == (inner, r470)

    def test_combine_parallel_flattens(self, r100, r220, r470):
        node = combine_parallel(parallel(r100, r220), parallel(r470, r470))
        assert node.children == (r100, r220, r470, r470)

    def test_operands_are_not_modified(self, r100, r220, r470):
        inner = series(r100, r220)
        combine_series(inner, r470)
        assert inner.children == (r100, r220)


class TestEquivalenceAndOrdering:
    """Test structural equality and cost ordering."""

    def test_leaf_equality_by_label(self):
        assert leaf(100.0, "100") == leaf(100.0, "100")
        assert leaf(100.0, "100") != leaf(100.0, "100.0")

    def test_child_order_matters(self, r100, r220):
        assert series(r100, r220) != series(r220, r100)

    def test_nesting_matters(self, r100, r220, r470):
        nested = Network(NodeKind.SERIES, (series(r100, r220), r470))
        flat = series(r100, r220, r470)
        assert nested != flat

    def test_kind_matters(self, r100, r220):
        assert series(r100, r220) != parallel(r100, r220)

    def test_equal_networks_hash_equal(self, r100, r220):
        assert hash(series(r100, r220)) == hash(series(leaf(100.0, "100"), leaf(220.0, "220")))
        assert len({series(r100, r220), series(r100, r220), series(r220, r100)}) == 2

    def test_fewer_leaves_sort_first(self, r100, r220):
        big_single = leaf(1e6, "1M")
        assert big_single < parallel(r100, r220)

    def test_same_leaf_count_sorted_by_resistance(self, r100, r220):
        assert parallel(r100, r220) < series(r100, r220)
        assert r100 < r220

    def test_compare_three_way(self, r100, r220):
        assert r100.compare(leaf(100.0, "100")) == 0
        assert r100.compare(r220) == -1
        assert r220.compare(r100) == 1

    def test_swapped_children_still_strictly_ordered(self, r100, r220):
        a, b = series(r100, r220), series(r220, r100)
        assert a.resistance() == b.resistance()
        assert (a < b) != (b < a)

    def test_strict_total_order(self, r100, r220, r470):
        pool = [r100, r220, r470]
        networks = list(pool)
        for x, y in itertools.product(pool, repeat=2):
            networks.append(combine_series(x, y))
            networks.append(combine_parallel(x, y))
        networks.append(series(parallel(r100, r220), r470))
        networks.append(parallel(series(r100, r220), r470))

        for x, y in itertools.product(networks, repeat=2):
            outcomes = [x < y, x == y, x > y]
            assert outcomes.count(True) == 1

        for x, y, z in itertools.product(networks, repeat=3):
            if x < y and y < z:
                assert x < z

    def test_sorting_is_deterministic(self, r100, r220):
        networks = [series(r220, r100), r220, parallel(r100, r220), series(r100, r220), r100]
        assert sorted(networks) == sorted(reversed(networks))
        assert sorted(networks)[:2] == [r100, r220]


class TestEquivalenceStrategies:
    """Test pluggable dedup keys."""

    def test_structural_key_respects_order(self, r100, r220):
        assert structural_key(series(r100, r220)) != structural_key(series(r220, r100))

    def test_canonical_key_ignores_child_order(self, r100, r220, r470):
        a = series(parallel(r100, r220), r470)
        b = series(r470, parallel(r220, r100))
        assert canonical_key(a) == canonical_key(b)

    def test_canonical_key_keeps_kind(self, r100, r220):
        assert canonical_key(series(r100, r220)) != canonical_key(parallel(r100, r220))

    def test_get_strategy_by_name(self):
        assert get_equivalence_strategy('structural') is structural_key
        assert get_equivalence_strategy('canonical') is canonical_key

    def test_get_strategy_passes_callables_through(self):
        custom = lambda network: network.total_leaf_count()  # noqa: E731
        assert get_equivalence_strategy(custom) is custom

    def test_unknown_strategy(self):
        with pytest.raises(ValueError):
            get_equivalence_strategy('electrical')


class TestReporting:
    """Test leaf usage and rendering helpers."""

    def test_leaf_usage_summary(self, r100, r220):
        node = series(parallel(r100, r100), r220, r100)
        assert node.leaf_usage_summary() == {"100": 3, "220": 1}

    def test_render_leaf(self, r100):
        assert render_network(r100) == "100Ω"

    def test_render_nested(self, r100, r220, r470):
        node = series(parallel(r100, r220), r470)
        assert render_network(node) == "Series[Parallel[100Ω, 220Ω], 470Ω]"
        assert str(node) == render_network(node)

    def test_network_to_dict(self, r100, r220):
        data = network_to_dict(series(r100, r220))
        assert data['kind'] == 'series'
        assert data['resistance'] == 320.0
        assert data['children'][0] == {'kind': 'leaf', 'label': '100', 'value': 100.0}
