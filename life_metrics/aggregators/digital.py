"""
Digital life aggregator: subscriptions, passwords, upcoming renewals.

Only records whose type is exactly "subscription" reach the subscription
count and the monthly rollup; digital assets carry one-time costs.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from life_metrics.classifiers import partition_entries
from life_metrics.config import Thresholds
from life_metrics.domain_models import DigitalStats, Domain, FactKind
from life_metrics.normalize import (
    difference_in_days,
    get_nested_value,
    lookup_first,
    map_entries,
    parse_numeric,
    pick_first_date,
    to_monthly,
)

from .base import resolve_now, resolve_thresholds

logger = logging.getLogger(__name__)
_DEFAULT_LOGGER = logger

SUBSCRIPTION_COST_KEYS = ("monthlyCost", "subscriptionCost", "cost")
PASSWORD_COUNT_KEYS = ("passwordCount", "passwordsStored", "passwords")
LOGIN_KEYS = ("username", "login", "email", "password")
EXPIRY_KEYS = (
    "renewalDate",
    "expiryDate",
    "expirationDate",
    "nextBillingDate",
    "nextChargeDate",
)


def count_passwords(meta: Mapping) -> float:
    """
    Passwords a record stands for:
    an explicit list, else an explicit count, else 1 if it holds login fields.
    """
    stored = get_nested_value(meta, "passwords")
    if isinstance(stored, (list, tuple)):
        return len(stored)

    count = parse_numeric(lookup_first(meta, PASSWORD_COUNT_KEYS))
    if count > 0:
        return count

    login = lookup_first(meta, LOGIN_KEYS)
    return 1 if login not in (None, "", False, 0) else 0


def compute_digital_stats(
    records: Iterable[Any] | None,
    *,
    now: Any = None,
    thresholds: Thresholds | None = None,
    logger: logging.Logger | None = None,
) -> DigitalStats:
    """Fold digital-life records into DigitalStats. Never raises."""
    log = logger if logger is not None else _DEFAULT_LOGGER
    mapped = map_entries(records)
    if not mapped:
        return DigitalStats()

    now = resolve_now(now)
    t = resolve_thresholds(thresholds)

    subscriptions = partition_entries(mapped, Domain.DIGITAL)[FactKind.SUBSCRIPTION]

    monthly_cost = 0.0
    for entry in subscriptions:
        amount = parse_numeric(lookup_first(entry.meta, SUBSCRIPTION_COST_KEYS))
        if amount == 0:
            continue
        monthly_cost += to_monthly(amount, entry.meta)

    passwords = sum(count_passwords(entry.meta) for entry in mapped)

    expiring = 0
    for entry in mapped:
        expiry = pick_first_date(entry.meta, EXPIRY_KEYS)
        if expiry is None:
            continue
        days_until = difference_in_days(expiry, now)
        if 0 <= days_until <= t.digital_expiring_window_days:
            expiring += 1

    log.debug(
        "Digital stats computed",
        extra={
            "total": len(mapped),
            "subscriptions": len(subscriptions),
            "monthly_cost": monthly_cost,
            "passwords": passwords,
            "expiring": expiring,
        },
    )

    return DigitalStats(
        has_data=True,
        entries_count=len(mapped),
        subscriptions=len(subscriptions),
        monthly_cost=monthly_cost,
        passwords=passwords,
        expiring=expiring,
    )
