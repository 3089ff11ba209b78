"""CLI utility functions."""

import json
import logging
import signal
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union

from resistor_search.core.network import OHM_SYMBOL, network_to_dict, render_network
from resistor_search.search.searcher import CancellationToken, SearchResult


class InterruptHandler:
    """Turn Ctrl-C into a cooperative search cancellation.

    Only the main thread may install signal handlers; elsewhere this is a
    no-op and KeyboardInterrupt behaves as usual.
    """

    def __init__(self, token: CancellationToken):
        """Initialize interrupt handler.

        Args:
            token: Token to cancel when SIGINT arrives
        """
        self.token = token
        self.interrupted = False
        self._previous = None

    def _handle(self, signum, frame):
        self.interrupted = True
        self.token.cancel()

    def __enter__(self):
        if threading.current_thread() is threading.main_thread():
            self._previous = signal.signal(signal.SIGINT, self._handle)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._previous is not None:
            signal.signal(signal.SIGINT, self._previous)
            self._previous = None


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True
    )


def save_results(results: Dict[str, Any],
                 output_path: Union[str, Path],
                 pretty: bool = True) -> None:
    """Save results to JSON file.

    Args:
        results: Results dictionary
        output_path: Output file path
        pretty: Whether to pretty-print JSON
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        if pretty:
            json.dump(results, f, indent=2, sort_keys=True, ensure_ascii=False)
        else:
            json.dump(results, f, ensure_ascii=False)


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted duration string
    """
    if seconds < 0.001:
        return f"{seconds*1000000:.1f}µs"
    elif seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.1f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        secs = seconds % 60
        return f"{hours}h {minutes}m {secs:.1f}s"


def format_resistance(ohms: Optional[float]) -> str:
    """Format a resistance with an SI prefix, e.g. ``4.700 kΩ``."""
    if ohms is None:
        return "N/A"
    magnitude = abs(ohms)
    if magnitude >= 1e9:
        return f"{ohms / 1e9:.3f} G{OHM_SYMBOL}"
    if magnitude >= 1e6:
        return f"{ohms / 1e6:.3f} M{OHM_SYMBOL}"
    if magnitude >= 1e3:
        return f"{ohms / 1e3:.3f} k{OHM_SYMBOL}"
    if 1e-4 < magnitude < 1:
        return f"{ohms * 1e3:.3f} m{OHM_SYMBOL}"
    return f"{ohms:.3f} {OHM_SYMBOL}"


def result_to_dict(result: SearchResult) -> Dict[str, Any]:
    """Convert a search result to a JSON-serialisable dictionary."""
    payload: Dict[str, Any] = {
        'success': result.success,
        'target': result.target,
        'threshold': result.threshold,
        'termination_reason': result.termination_reason,
        'budget_exhausted': result.budget_exhausted,
        'computation_time': result.computation_time,
        'search_stats': result.statistics or {},
    }
    if result.network is not None:
        payload.update({
            'network': network_to_dict(result.network),
            'rendered': render_network(result.network),
            'resistance': result.resistance,
            'error': result.error,
            'resistor_count': result.network.total_leaf_count(),
            'leaf_usage': result.network.leaf_usage_summary(),
        })
    return payload


def print_result(result: SearchResult, title: Optional[str] = None) -> None:
    """Print a human-readable search report.

    Args:
        result: Search result to report
        title: Optional heading, e.g. ``R1``
    """
    if title:
        print(f"{title}: target {format_resistance(result.target)} "
              f"(± {format_resistance(result.threshold)})")

    if result.network is None:
        if result.budget_exhausted:
            print(f"No arrangement found within the search budget ({result.termination_reason})")
        else:
            print("No arrangement found!")
        return

    print(render_network(result.network))
    print(f"Resistance: {format_resistance(result.resistance)} "
          f"(error {format_resistance(result.error)})")
    usage = result.network.leaf_usage_summary()
    print("Resistors used: " + ", ".join(
        f"{count} x {label}{OHM_SYMBOL}" for label, count in usage.items()
    ))
    print(f"Search: {result.nodes_expanded} expanded, {result.nodes_generated} generated "
          f"in {format_duration(result.computation_time)}")
