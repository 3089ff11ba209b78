"""CLI command implementations."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from omegaconf import DictConfig, OmegaConf

from resistor_search.config import (
    load_config, default_config, validate_config, ConfigValidationError
)
from resistor_search.core.catalogue import (
    CatalogueEntry, InvalidValueError, e_series_catalogue, parse_catalogue, parse_value
)
from resistor_search.design.timer import design_timer
from resistor_search.search.searcher import (
    CancellationToken, ResistorSearcher, SearchConfig, SearchResult
)

from .utils import InterruptHandler, print_result, result_to_dict, save_results

logger = logging.getLogger(__name__)

# Value of a bare --relative-threshold: take the fraction from the configuration
CONFIGURED = 'configured'


class ResistorSolver:
    """Runs searches with settings taken from the loaded configuration."""

    def __init__(self, config_overrides: Optional[List[str]] = None):
        """Initialize solver.

        Args:
            config_overrides: List of configuration overrides (``key=value``)
        """
        self.config = self._load_config(config_overrides or [])
        self.search_config = self._build_search_config(self.config)

    @staticmethod
    def _load_config(overrides: List[str]) -> DictConfig:
        try:
            return load_config(overrides=overrides)
        except FileNotFoundError:
            logger.warning("Configuration directory not found, using built-in defaults")

        config = default_config()
        if overrides:
            config = OmegaConf.merge(config, OmegaConf.from_dotlist(overrides))
        validate_config(config)
        return config

    @staticmethod
    def _build_search_config(config: DictConfig) -> SearchConfig:
        search_cfg = config.get('search', {})
        budget = search_cfg.get('budget', {})
        defaults = SearchConfig()
        return SearchConfig(
            max_nodes_expanded=budget.get('max_nodes_expanded', defaults.max_nodes_expanded),
            max_explored=budget.get('max_explored', defaults.max_explored),
            max_computation_time=budget.get('max_computation_time', defaults.max_computation_time),
            equivalence=str(search_cfg.get('equivalence', defaults.equivalence))
        )

    def solve(self, target: float, threshold: float, catalogue: Sequence[CatalogueEntry],
              cancel_token: Optional[CancellationToken] = None) -> SearchResult:
        """Search for a single target resistance."""
        searcher = ResistorSearcher(target, threshold, catalogue, config=self.search_config)
        return searcher.search(cancel_token=cancel_token)


def _config_overrides(args) -> List[str]:
    return list(getattr(args, 'config', None) or [])


def build_catalogue(args, config: DictConfig) -> List[CatalogueEntry]:
    """Combine explicit values with an optional preferred-number series.

    Without explicit values or ``--series`` the configured
    ``catalogue.series`` is used.
    """
    entries = parse_catalogue(args.values)

    series = getattr(args, 'series', None)
    if not series and not entries:
        series = config.catalogue.get('series')
        if series:
            logger.info(f"No values given, using configured series {series}")
    if series:
        decades = getattr(args, 'decades', None)
        if decades:
            low, high = sorted(int(d) for d in decades)
            decade_range = range(low, high + 1)
        else:
            decade_range = list(config.catalogue.decades)
        seen = {label for label, _ in entries}
        entries.extend(entry for entry in e_series_catalogue(series, decade_range)
                       if entry[0] not in seen)

    return entries


def _report(results: Dict[str, Any], args) -> None:
    if args.output:
        save_results(results, args.output)
        logger.info(f"Results saved to {args.output}")


def find_command(args) -> int:
    """Handle find command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = ResistorSolver(_config_overrides(args))
        search_cfg = solver.config.search

        target = parse_value(args.target, name="target")
        if args.threshold is not None:
            threshold = parse_value(args.threshold, name="threshold")
        elif args.relative_threshold is not None:
            fraction = args.relative_threshold
            if fraction == CONFIGURED:
                fraction = search_cfg.relative_threshold
            threshold = target * parse_value(fraction, name="relative threshold")
        else:
            threshold = parse_value(search_cfg.threshold, name="threshold")

        catalogue = build_catalogue(args, solver.config)
        logger.info(f"Searching {len(catalogue)} catalogue values for {target} ohm ± {threshold}")

        token = CancellationToken()
        with InterruptHandler(token):
            result = solver.solve(target, threshold, catalogue, cancel_token=token)

        _report(result_to_dict(result), args)
        if not args.quiet:
            print_result(result)

        return 0 if result.success else 1

    except (InvalidValueError, ConfigValidationError) as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except Exception as e:
        logger.error(f"Find command failed: {e}")
        return 1


def timer_command(args) -> int:
    """Handle timer command: search both timing resistances for a frequency.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        solver = ResistorSolver(_config_overrides(args))
        timer_cfg = solver.config.timer

        capacitance = args.capacitance if args.capacitance is not None else timer_cfg.capacitance
        tolerance = (args.relative_tolerance if args.relative_tolerance is not None
                     else timer_cfg.relative_tolerance)
        targets = design_timer(args.frequency, capacitance, tolerance)
        catalogue = build_catalogue(args, solver.config)

        token = CancellationToken()
        with InterruptHandler(token):
            r1 = solver.solve(targets.r1, targets.r1_threshold, catalogue, cancel_token=token)
            r2 = solver.solve(targets.r2, targets.r2_threshold, catalogue, cancel_token=token)

        _report({
            'frequency': targets.frequency,
            'capacitance': targets.capacitance,
            'r1': result_to_dict(r1),
            'r2': result_to_dict(r2),
        }, args)

        if not args.quiet:
            print(f"Frequency: {targets.frequency:g} Hz, C = {targets.capacitance:g} F")
            print_result(r1, title="R1")
            print()
            print_result(r2, title="R2")

        return 0 if r1.success and r2.success else 1

    except (InvalidValueError, ConfigValidationError) as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except Exception as e:
        logger.error(f"Timer command failed: {e}")
        return 1


def config_command(args) -> int:
    """Handle config command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code
    """
    try:
        if args.config_action == 'show':
            config = ResistorSolver(_config_overrides(args)).config
            print("Current Configuration:")
            print("=" * 50)
            print(OmegaConf.to_yaml(config, resolve=True))
            return 0

        elif args.config_action == 'validate':
            try:
                config = load_config(overrides=_config_overrides(args), validate=False)
                validate_config(config)
                print("Configuration is valid")
                return 0
            except ConfigValidationError as e:
                print(f"Configuration validation failed: {e}")
                return 1

        else:
            print("Unknown config action")
            return 1

    except Exception as e:
        logger.error(f"Config command failed: {e}")
        return 1
