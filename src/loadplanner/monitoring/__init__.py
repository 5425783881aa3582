"""Monitoring module for loadplanner.

Provides Telegram notifications and metrics tracking for placement simulations.
"""

from .metrics import (
    ContainerMetrics,
    SimulationMetrics,
    export_to_csv,
    export_to_json,
    print_summary,
)
from .telegram_notifier import (
    format_container_loaded,
    format_error,
    format_final_summary,
    format_simulation_start,
    format_unplaced_items,
    send_telegram,
)

__all__ = [
    # Metrics
    "ContainerMetrics",
    "SimulationMetrics",
    "export_to_csv",
    "export_to_json",
    "print_summary",
    # Telegram
    "send_telegram",
    "format_simulation_start",
    "format_container_loaded",
    "format_unplaced_items",
    "format_error",
    "format_final_summary",
]
