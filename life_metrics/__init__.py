"""
life_metrics: heuristic extraction and aggregation of personal life data.

Records from many uncoordinated input paths (forms, OCR scans, image
analysis, voice commands) carry free-form nested metadata. This package
turns a record collection into canonical dashboard statistics per domain:

    from life_metrics import compute_health_stats

    stats = compute_health_stats(records)
    stats.weight, stats.blood_pressure

Every public function is synchronous and pure, and never raises on
malformed records. Diagnostics go to the ``life_metrics`` logger, which is
silent unless the host configures logging.
"""

import logging

from .aggregators import (
    compute_appliances_stats,
    compute_dashboard_stats,
    compute_digital_stats,
    compute_health_stats,
    compute_pets_stats,
)
from .config import DEFAULT_THRESHOLDS, Thresholds, ThresholdsError, load_thresholds
from .domain_models import (
    AppliancesStats,
    DashboardStats,
    DigitalStats,
    Domain,
    FactKind,
    HealthStats,
    MappedEntry,
    MonthlyCostBasis,
    PetsStats,
    Record,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Aggregators
    "compute_health_stats",
    "compute_pets_stats",
    "compute_digital_stats",
    "compute_appliances_stats",
    "compute_dashboard_stats",
    # Models
    "Record",
    "MappedEntry",
    "Domain",
    "FactKind",
    "MonthlyCostBasis",
    "HealthStats",
    "PetsStats",
    "DigitalStats",
    "AppliancesStats",
    "DashboardStats",
    # Config
    "Thresholds",
    "ThresholdsError",
    "DEFAULT_THRESHOLDS",
    "load_thresholds",
]
