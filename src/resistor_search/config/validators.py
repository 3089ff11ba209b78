"""Configuration validation for resistor-search."""

import logging
from omegaconf import DictConfig

from resistor_search.core.catalogue import E_SERIES
from resistor_search.core.equivalence import EQUIVALENCE_STRATEGIES

logger = logging.getLogger(__name__)


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_catalogue_config(config.get('catalogue', {}))
        validate_timer_config(config.get('timer', {}))

        logger.info("Configuration validation passed")

    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}")


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    threshold = search_config.get('threshold', 0.1)
    if not _is_number(threshold) or threshold <= 0:
        raise ConfigValidationError(
            f"search.threshold must be positive number, got {threshold}"
        )

    relative = search_config.get('relative_threshold', 0.01)
    if not _is_number(relative) or not 0 < relative < 1:
        raise ConfigValidationError(
            f"search.relative_threshold must be between 0 and 1, got {relative}"
        )

    equivalence = search_config.get('equivalence', 'structural')
    if equivalence not in EQUIVALENCE_STRATEGIES:
        raise ConfigValidationError(
            f"search.equivalence must be one of {sorted(EQUIVALENCE_STRATEGIES)}, got {equivalence}"
        )

    budget = search_config.get('budget', {})
    if budget:
        # null disables a limit
        for key in ['max_nodes_expanded', 'max_explored']:
            limit = budget.get(key)
            if limit is not None and (not isinstance(limit, int) or isinstance(limit, bool) or limit <= 0):
                raise ConfigValidationError(
                    f"search.budget.{key} must be positive integer or null, got {limit}"
                )

        timeout = budget.get('max_computation_time')
        if timeout is not None and (not _is_number(timeout) or timeout <= 0):
            raise ConfigValidationError(
                f"search.budget.max_computation_time must be positive number or null, got {timeout}"
            )

        if all(budget.get(key) is None for key in
               ['max_nodes_expanded', 'max_explored', 'max_computation_time']):
            logger.warning("All search budgets disabled; unreachable targets will never terminate")


def validate_catalogue_config(catalogue_config: DictConfig) -> None:
    """Validate catalogue configuration section.

    Args:
        catalogue_config: Catalogue configuration section
    """
    if not catalogue_config:
        return

    # null disables the fallback series for commands given no values
    series = catalogue_config.get('series', 'E12')
    if series is not None and str(series).upper() not in E_SERIES:
        raise ConfigValidationError(
            f"catalogue.series must be one of {sorted(E_SERIES)}, got {series}"
        )

    decades = catalogue_config.get('decades', [])
    if not decades or not all(isinstance(d, int) and not isinstance(d, bool) for d in decades):
        raise ConfigValidationError(
            f"catalogue.decades must be a non-empty list of integers, got {decades}"
        )


def validate_timer_config(timer_config: DictConfig) -> None:
    """Validate timer configuration section.

    Args:
        timer_config: Timer configuration section
    """
    if not timer_config:
        return

    capacitance = timer_config.get('capacitance', 47e-9)
    if not _is_number(capacitance) or capacitance <= 0:
        raise ConfigValidationError(
            f"timer.capacitance must be positive number, got {capacitance}"
        )
    if capacitance > 1.0:
        logger.warning(f"timer.capacitance {capacitance} F looks like it is not in farads")

    tolerance = timer_config.get('relative_tolerance', 0.01)
    if not _is_number(tolerance) or not 0 < tolerance < 1:
        raise ConfigValidationError(
            f"timer.relative_tolerance must be between 0 and 1, got {tolerance}"
        )
