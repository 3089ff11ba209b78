"""Command-line interface for resistor-search.

This module provides CLI commands for single-target searches and timer design.
"""

from .main import main_cli
from .commands import find_command, timer_command, config_command
from .utils import setup_logging, save_results, format_resistance

__all__ = [
    'main_cli',
    'find_command',
    'timer_command',
    'config_command',
    'setup_logging',
    'save_results',
    'format_resistance'
]
