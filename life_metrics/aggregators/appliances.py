"""
Appliances aggregator: value, warranties, maintenance, lifetime cost.

Appliances arrive from two collections (domain records and the dedicated
appliance table). Both are merged, deduplicated by identity, and every
figure is summed once per physical appliance.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta
from typing import Any

from life_metrics.config import Thresholds
from life_metrics.dedup import dedupe_entries
from life_metrics.domain_models import AppliancesStats
from life_metrics.normalize import (
    lookup_first,
    map_entries,
    parse_date,
    parse_numeric,
    pick_first_date,
)

from .base import is_truthy_flag, resolve_now, resolve_thresholds

logger = logging.getLogger(__name__)
_DEFAULT_LOGGER = logger

VALUE_KEYS = (
    "value",
    "purchasePrice",
    "purchase_price",
    "estimatedValue",
    "cost",
    "replacementCost",
)
PURCHASE_PRICE_KEYS = ("purchasePrice", "purchase_price", "value")
MAINTENANCE_COST_KEYS = (
    "cost",
    "maintenanceCost",
    "maintenance_cost",
    "annualCost",
    "monthlyCost",
)
# Aggregate supplied by the appliance-cost table upstream
TABLE_COST_KEYS = ("totalCostsFromTable", "allCosts")

WARRANTY_EXPIRY_KEYS = (
    "warrantyExpiry",
    "warranty_expiry",
    "warrantyExpires",
    "extendedWarranty",
)
MAINTENANCE_FLAG_KEYS = (
    "maintenanceDue",
    "needsMaintenance",
    "needs_maintenance",
    "maintenanceRequired",
)
MAINTENANCE_DATE_KEYS = (
    "nextMaintenance",
    "maintenanceDue",
    "serviceDue",
    "inspectionDue",
    "nextServiceDate",
)
MAINTENANCE_DUE_STATUSES = ("overdue", "due")
_FALSE_FLAGS = ("false", "no", "0", "none", "n/a")


def needs_maintenance(meta: Mapping, now: datetime) -> bool:
    """
    Maintenance heuristics, first hit wins:
    1. a truthy flag (True, "true", or any free-text note)
    2. a date stored in a flag field, on or before now
    3. status "overdue" or "due"
    4. a maintenance/service date on or before now
    """
    flag = lookup_first(meta, MAINTENANCE_FLAG_KEYS)
    if is_truthy_flag(flag):
        return True
    if isinstance(flag, str) and flag.strip() and flag.strip().lower() not in _FALSE_FLAGS:
        flag_date = parse_date(flag)
        if flag_date is None or flag_date <= now:
            return True

    status = lookup_first(meta, ("status",))
    if isinstance(status, str) and status.strip().lower() in MAINTENANCE_DUE_STATUSES:
        return True

    due = pick_first_date(meta, MAINTENANCE_DATE_KEYS)
    return due is not None and due <= now


def compute_appliances_stats(
    records: Iterable[Any] | None,
    additional_records: Iterable[Any] | None = None,
    *,
    now: Any = None,
    thresholds: Thresholds | None = None,
    logger: logging.Logger | None = None,
) -> AppliancesStats:
    """Merge, deduplicate, and fold appliance records. Never raises."""
    log = logger if logger is not None else _DEFAULT_LOGGER
    merged = map_entries(records) + map_entries(additional_records)
    if not merged:
        return AppliancesStats()

    now = resolve_now(now)
    t = resolve_thresholds(thresholds)
    warranty_horizon = now + timedelta(days=t.warranty_due_window_days)

    appliances = dedupe_entries(merged)

    total_value = 0.0
    total_cost = 0.0
    under_warranty = 0
    warranties_due = 0
    needs_maint = 0

    for entry in appliances:
        meta = entry.meta
        total_value += parse_numeric(lookup_first(meta, VALUE_KEYS))
        total_cost += (
            parse_numeric(lookup_first(meta, PURCHASE_PRICE_KEYS))
            + parse_numeric(lookup_first(meta, MAINTENANCE_COST_KEYS))
            + parse_numeric(lookup_first(meta, TABLE_COST_KEYS))
        )

        expiry = pick_first_date(meta, WARRANTY_EXPIRY_KEYS)
        if expiry is not None and expiry > now:
            under_warranty += 1
            if expiry <= warranty_horizon:
                warranties_due += 1

        if needs_maintenance(meta, now):
            needs_maint += 1

    log.debug(
        "Appliance stats computed",
        extra={
            "merged": len(merged),
            "deduplicated": len(appliances),
            "total_value": total_value,
            "under_warranty": under_warranty,
            "needs_maint": needs_maint,
            "warranties_due": warranties_due,
            "total_cost": total_cost,
        },
    )

    return AppliancesStats(
        has_data=True,
        entries_count=len(merged),
        count=len(appliances),
        total_value=total_value,
        under_warranty=under_warranty,
        needs_maint=needs_maint,
        warranties_due=warranties_due,
        total_cost=total_cost,
    )
