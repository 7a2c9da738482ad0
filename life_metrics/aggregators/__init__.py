"""
Per-domain aggregators.

Each aggregator maps records (normalize + resolve dates), partitions them
with the domain classifiers, optionally deduplicates, and folds the result
into one frozen stats object. All are pure functions of
(records, now, thresholds); the logger only receives DEBUG diagnostics.
"""

from .appliances import compute_appliances_stats
from .dashboard import compute_dashboard_stats
from .digital import compute_digital_stats
from .health import compute_health_stats
from .pets import compute_pets_stats

__all__ = [
    "compute_health_stats",
    "compute_pets_stats",
    "compute_digital_stats",
    "compute_appliances_stats",
    "compute_dashboard_stats",
]
