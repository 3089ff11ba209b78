"""Astable timer oscillator design.

Converts a target frequency into the two timing resistances of a 555-style
astable oscillator with a fixed capacitor, plus a search threshold for each
resistance proportional to its size.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from resistor_search.core.catalogue import parse_value

logger = logging.getLogger(__name__)

DEFAULT_CAPACITANCE = 47e-9  # farads
DEFAULT_RELATIVE_TOLERANCE = 0.01
LN2 = 0.6931


@dataclass
class TimerTargets:
    """Resistances (and per-resistance thresholds) for a target frequency."""
    frequency: float
    capacitance: float
    r1: float
    r2: float
    r1_threshold: float
    r2_threshold: float


def timer_resistances(frequency: float, capacitance: float = DEFAULT_CAPACITANCE) -> Tuple[float, float]:
    """Compute R1 and R2 for the given frequency and timing capacitor.

    Args:
        frequency: Oscillation frequency in hertz
        capacitance: Timing capacitance in farads

    Returns:
        (R1, R2) in ohms
    """
    frequency = parse_value(frequency, name="frequency")
    capacitance = parse_value(capacitance, name="capacitance")

    r1 = (0.75 / frequency - 0.25 / frequency) / (LN2 * capacitance)
    r2 = (0.75 / frequency) / (LN2 * capacitance)
    return r1, r2


def design_timer(frequency: float,
                 capacitance: float = DEFAULT_CAPACITANCE,
                 relative_tolerance: float = DEFAULT_RELATIVE_TOLERANCE) -> TimerTargets:
    """Derive both search targets for a timer.

    Each threshold is ``relative_tolerance`` times its own resistance so the
    two searches aim for the same relative accuracy.
    """
    relative_tolerance = parse_value(relative_tolerance, name="relative tolerance")
    r1, r2 = timer_resistances(frequency, capacitance)

    targets = TimerTargets(
        frequency=float(frequency),
        capacitance=float(capacitance),
        r1=r1,
        r2=r2,
        r1_threshold=r1 * relative_tolerance,
        r2_threshold=r2 * relative_tolerance
    )
    logger.info(f"Timer at {targets.frequency:g} Hz with C={targets.capacitance:g} F: "
                f"R1={r1:.6g} ohm, R2={r2:.6g} ohm")
    return targets
