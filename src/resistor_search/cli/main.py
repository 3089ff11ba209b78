"""Main CLI entry point for resistor-search."""

import sys
import argparse
import logging
from typing import List, Optional

from . import commands
from .utils import setup_logging


def _add_catalogue_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        'values',
        nargs='*',
        help='Available resistor values in ohms (default: the configured catalogue.series)'
    )

    parser.add_argument(
        '--series',
        type=str,
        help='Add a preferred number series to the catalogue (E3, E6, E12, E24)'
    )

    parser.add_argument(
        '--decades',
        type=int,
        nargs=2,
        metavar=('LOW', 'HIGH'),
        help='Powers of ten covered by --series (default from configuration)'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog='resistor-search',
        description='Find series/parallel resistor networks matching a target resistance',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  resistor-search find 320 100 220              # Target 320 ohm from 100 and 220 ohm parts
  resistor-search find 1234 --series E12        # Search the E12 series
  resistor-search find 4700 -r                  # Configured series, configured relative tolerance
  resistor-search timer 1000 1000 2200 4700     # Timer resistors for 1 kHz
  resistor-search config show                   # Show current configuration
        """
    )

    # Global options
    parser.add_argument(
        '--config', '-c',
        type=str,
        action='append',
        help='Configuration override (e.g., search.budget.max_explored=50000); repeatable'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help='Increase verbosity (use -v or -vv)'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all output except errors'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for results (JSON format)'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        metavar='COMMAND'
    )

    # Find command
    find_parser = subparsers.add_parser(
        'find',
        help='Find a network for a target resistance',
        description='Find a series/parallel network of available resistors matching a target'
    )

    find_parser.add_argument(
        'target',
        type=str,
        help='Target resistance in ohms'
    )

    _add_catalogue_arguments(find_parser)

    threshold_group = find_parser.add_mutually_exclusive_group()
    threshold_group.add_argument(
        '--threshold', '-t',
        type=str,
        help='Absolute tolerance in ohms (default: 0.1)'
    )
    threshold_group.add_argument(
        '--relative-threshold', '-r',
        type=str,
        nargs='?',
        const=commands.CONFIGURED,
        metavar='FRACTION',
        help='Tolerance as a fraction of the target (e.g. 0.01 for 1%%); '
             'without a value search.relative_threshold is used'
    )

    # Timer command
    timer_parser = subparsers.add_parser(
        'timer',
        help='Find both timing resistors for an astable timer',
        description='Derive R1 and R2 for a target frequency and search each of them'
    )

    timer_parser.add_argument(
        'frequency',
        type=float,
        help='Oscillation frequency in hertz'
    )

    _add_catalogue_arguments(timer_parser)

    timer_parser.add_argument(
        '--capacitance',
        type=float,
        help='Timing capacitance in farads (default: 47e-9)'
    )

    timer_parser.add_argument(
        '--relative-tolerance',
        type=float,
        help='Per-resistor tolerance as a fraction of its value (default: 0.01)'
    )

    # Config command
    config_parser = subparsers.add_parser(
        'config',
        help='Configuration management',
        description='Show or validate configuration'
    )

    config_subparsers = config_parser.add_subparsers(
        dest='config_action',
        help='Configuration actions'
    )

    config_subparsers.add_parser(
        'show',
        help='Show current configuration'
    )

    config_subparsers.add_parser(
        'validate',
        help='Validate configuration'
    )

    return parser


def main_cli(args: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.quiet:
        log_level = logging.ERROR
    elif parsed_args.verbose == 0:
        log_level = logging.WARNING
    elif parsed_args.verbose == 1:
        log_level = logging.INFO
    else:
        log_level = logging.DEBUG

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    try:
        if not parsed_args.command:
            parser.print_help()
            return 1

        if parsed_args.command == 'find':
            return commands.find_command(parsed_args)
        if parsed_args.command == 'timer':
            return commands.timer_command(parsed_args)
        if parsed_args.command == 'config':
            return commands.config_command(parsed_args)

        logger.error(f"Unknown command: {parsed_args.command}")
        return 1

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130  # Standard exit code for SIGINT


def main() -> None:
    """Entry point for console script."""
    sys.exit(main_cli())


if __name__ == '__main__':
    main()
