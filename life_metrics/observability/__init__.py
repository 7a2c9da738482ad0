"""
Observability module: structured logging for aggregation diagnostics.

Usage:
    from life_metrics.observability import configure_logging, get_logger

    configure_logging("DEBUG", json_format=True)
    stats = compute_health_stats(records, logger=get_logger("dashboard.health"))
"""

from .logging import (
    HumanFormatter,
    JSONFormatter,
    configure_logging,
    get_logger,
    silent_logger,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "silent_logger",
    "JSONFormatter",
    "HumanFormatter",
]
