"""Tests for astable timer design."""

import pytest

from resistor_search.core.catalogue import InvalidValueError
from resistor_search.design.timer import (
    DEFAULT_CAPACITANCE, design_timer, timer_resistances
)
from resistor_search.search.searcher import search


class TestTimerResistances:
    """Test frequency to resistance conversion."""

    def test_one_kilohertz_47n(self):
        r1, r2 = timer_resistances(1000.0, 47e-9)

        assert r1 == pytest.approx((0.75 / 1000 - 0.25 / 1000) / (0.6931 * 47e-9), rel=1e-6)
        assert r2 == pytest.approx((0.75 / 1000) / (0.6931 * 47e-9), rel=1e-6)
        assert r1 == pytest.approx(15348.864, rel=1e-6)
        assert r2 == pytest.approx(23023.297, rel=1e-6)

    def test_default_capacitance(self):
        assert DEFAULT_CAPACITANCE == 47e-9
        assert timer_resistances(1000.0) == timer_resistances(1000.0, 47e-9)

    def test_r2_is_one_and_a_half_r1(self):
        r1, r2 = timer_resistances(440.0, 10e-9)
        assert r2 == pytest.approx(1.5 * r1)

    def test_invalid_frequency(self):
        with pytest.raises(InvalidValueError):
            timer_resistances(0.0)
        with pytest.raises(InvalidValueError):
            timer_resistances(1000.0, -1e-9)


class TestDesignTimer:
    """Test derived search targets."""

    def test_thresholds_scale_with_resistance(self):
        targets = design_timer(1000.0, 47e-9, relative_tolerance=0.01)

        assert targets.r1_threshold == pytest.approx(targets.r1 * 0.01)
        assert targets.r2_threshold == pytest.approx(targets.r2 * 0.01)
        assert targets.r1_threshold < targets.r2_threshold

    def test_both_targets_searched_independently(self):
        targets = design_timer(1000.0, 47e-9, relative_tolerance=0.05)
        catalogue = [("10000", 10000.0), ("22000", 22000.0), ("4700", 4700.0)]

        r1 = search(targets.r1, targets.r1_threshold, catalogue)
        r2 = search(targets.r2, targets.r2_threshold, catalogue)

        assert abs(r1.resistance() - targets.r1) < targets.r1_threshold
        assert abs(r2.resistance() - targets.r2) < targets.r2_threshold
