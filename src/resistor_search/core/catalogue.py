"""Resistor catalogue parsing and validation.

All user-supplied numbers (catalogue values, targets, thresholds) go through
:func:`parse_value` before a search starts, so the search itself never has to
deal with malformed input.
"""

import logging
import math
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

CatalogueEntry = Tuple[str, float]

# Preferred number series (IEC 60063), one decade each
E_SERIES = {
    'E3': [1.0, 2.2, 4.7],
    'E6': [1.0, 1.5, 2.2, 3.3, 4.7, 6.8],
    'E12': [1.0, 1.2, 1.5, 1.8, 2.2, 2.7, 3.3, 3.9, 4.7, 5.6, 6.8, 8.2],
    'E24': [1.0, 1.1, 1.2, 1.3, 1.5, 1.6, 1.8, 2.0, 2.2, 2.4, 2.7, 3.0,
            3.3, 3.6, 3.9, 4.3, 4.7, 5.1, 5.6, 6.2, 6.8, 7.5, 8.2, 9.1],
}


class InvalidValueError(ValueError):
    """Raised when a resistance, target or threshold is not a usable number."""
    pass


def parse_value(text: Union[str, float], name: str = "value") -> float:
    """Parse a strictly positive, finite number.

    Args:
        text: String (or number) to parse
        name: What the value is, used in error messages

    Returns:
        Parsed value

    Raises:
        InvalidValueError: If the value is not a number or not positive
    """
    try:
        value = float(text)
    except (TypeError, ValueError):
        raise InvalidValueError(f"{name} must be a number, got {text!r}") from None

    if not math.isfinite(value) or value <= 0:
        raise InvalidValueError(f"{name} must be a positive finite number, got {text!r}")

    return value


def parse_catalogue(texts: Iterable[str]) -> List[CatalogueEntry]:
    """Parse resistor values into ``(label, value)`` entries.

    Labels are kept exactly as supplied (minus surrounding whitespace);
    repeated labels collapse onto their first occurrence.
    """
    entries: List[CatalogueEntry] = []
    seen = set()
    for text in texts:
        label = str(text).strip()
        value = parse_value(label, name="resistor value")
        if label in seen:
            logger.debug(f"Dropping duplicate catalogue entry {label!r}")
            continue
        seen.add(label)
        entries.append((label, value))
    return entries


def validate_catalogue(available: Sequence[CatalogueEntry]) -> List[CatalogueEntry]:
    """Check already-parsed ``(label, value)`` entries.

    Raises:
        InvalidValueError: If an entry has a non-positive or non-numeric value
    """
    entries: List[CatalogueEntry] = []
    seen = set()
    for label, value in available:
        label = str(label)
        value = parse_value(value, name=f"resistor {label!r}")
        if label in seen:
            continue
        seen.add(label)
        entries.append((label, value))
    return entries


def format_value(value: float) -> str:
    """Format a resistance without trailing zeros or exponent notation."""
    return np.format_float_positional(float(value), trim='-')


def e_series_catalogue(series: str = 'E12', decades: Iterable[int] = (0, 1, 2, 3)) -> List[CatalogueEntry]:
    """Build a catalogue from a preferred number series.

    Args:
        series: Series name, e.g. ``'E12'``
        decades: Powers of ten to scale the base series by

    Returns:
        Entries in ascending order of value
    """
    key = series.upper()
    if key not in E_SERIES:
        raise InvalidValueError(f"Unknown series {series!r}, expected one of {sorted(E_SERIES)}")

    scales = 10.0 ** np.asarray(list(decades), dtype=np.float64)
    values = np.round(np.outer(np.sort(scales), E_SERIES[key]).ravel(), 6)
    return parse_catalogue(format_value(v) for v in values)
