"""
Dashboard bundle: every domain aggregator from one collection mapping.
"""

import logging
from collections.abc import Mapping
from typing import Any

from life_metrics.config import Thresholds
from life_metrics.domain_models import DashboardStats, Domain

from .appliances import compute_appliances_stats
from .base import resolve_now
from .digital import compute_digital_stats
from .health import compute_health_stats
from .pets import compute_pets_stats

APPLIANCE_TABLE_KEY = "appliance_table"


def compute_dashboard_stats(
    collections: Mapping[str, Any] | None,
    *,
    now: Any = None,
    thresholds: Thresholds | None = None,
    logger: logging.Logger | None = None,
) -> DashboardStats:
    """
    Compute all domain stats.

    ``collections`` maps "health", "pets", "digital", "appliances" and
    "appliance_table" (the supplementary appliance source) to record lists.
    Missing keys are empty domains. One reference time is shared by all.
    """
    if not isinstance(collections, Mapping):
        collections = {}
    now = resolve_now(now)

    return DashboardStats(
        health=compute_health_stats(collections.get(Domain.HEALTH.value), logger=logger),
        pets=compute_pets_stats(
            collections.get(Domain.PETS.value),
            now=now,
            thresholds=thresholds,
            logger=logger,
        ),
        digital=compute_digital_stats(
            collections.get(Domain.DIGITAL.value),
            now=now,
            thresholds=thresholds,
            logger=logger,
        ),
        appliances=compute_appliances_stats(
            collections.get(Domain.APPLIANCES.value),
            collections.get(APPLIANCE_TABLE_KEY),
            now=now,
            thresholds=thresholds,
            logger=logger,
        ),
    )
