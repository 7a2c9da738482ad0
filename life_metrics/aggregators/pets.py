"""
Pets aggregator: profiles, vet spend, vaccinations, monthly cost.

Monthly cost has two sources, and the result says which one was used:
- explicit: sum of expenses flagged recurring (frequency-normalized)
- estimated: non-vet spend over the trailing window, when nothing is
  flagged recurring
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

from life_metrics.classifiers import partition_entries
from life_metrics.config import Thresholds
from life_metrics.domain_models import (
    Domain,
    FactKind,
    MappedEntry,
    MonthlyCostBasis,
    PetsStats,
)
from life_metrics.normalize import (
    get_nested_value,
    lookup_first,
    map_entries,
    parse_numeric,
    pick_first_date,
    to_monthly,
)

from .base import is_truthy_flag, resolve_now, resolve_thresholds

logger = logging.getLogger(__name__)
_DEFAULT_LOGGER = logger

COST_KEYS = ("cost", "amount", "expenseAmount")
RECURRING_KEYS = ("recurring", "isRecurring")
VACCINE_DUE_KEYS = ("nextDue", "dueDate", "renewalDate")


def _occurred_since(entry: MappedEntry, cutoff: datetime) -> bool:
    return entry.occurred_at is not None and entry.occurred_at >= cutoff


def _is_recurring(entry: MappedEntry) -> bool:
    return is_truthy_flag(lookup_first(entry.meta, RECURRING_KEYS))


def _monthly_amount(entry: MappedEntry) -> float:
    """An explicit monthlyCost is already monthly; other amounts are normalized."""
    monthly = get_nested_value(entry.meta, "monthlyCost")
    if monthly is not None:
        return parse_numeric(monthly)
    return to_monthly(parse_numeric(lookup_first(entry.meta, COST_KEYS)), entry.meta)


def _monthly_cost(
    expenses: list[MappedEntry], vet_ids: set[int], estimate_cutoff: datetime
) -> tuple[float, MonthlyCostBasis]:
    non_vet = [e for e in expenses if id(e) not in vet_ids]

    recurring = [e for e in non_vet if _is_recurring(e)]
    if recurring:
        return sum(_monthly_amount(e) for e in recurring), MonthlyCostBasis.EXPLICIT

    recent = [e for e in non_vet if _occurred_since(e, estimate_cutoff)]
    if recent:
        total = sum(parse_numeric(lookup_first(e.meta, COST_KEYS)) for e in recent)
        return total, MonthlyCostBasis.ESTIMATED

    return 0, MonthlyCostBasis.NONE


def compute_pets_stats(
    records: Iterable[Any] | None,
    *,
    now: Any = None,
    thresholds: Thresholds | None = None,
    logger: logging.Logger | None = None,
) -> PetsStats:
    """Fold pet records into PetsStats. Never raises."""
    log = logger if logger is not None else _DEFAULT_LOGGER
    mapped = map_entries(records)
    if not mapped:
        return PetsStats()

    now = resolve_now(now)
    t = resolve_thresholds(thresholds)
    cost_cutoff = now - timedelta(days=t.vet_cost_window_days)
    year_cutoff = now - timedelta(days=t.vet_count_window_days)
    vaccine_horizon = now + timedelta(days=t.vaccine_due_window_days)
    estimate_cutoff = now - timedelta(days=t.pet_expense_estimate_days)

    buckets = partition_entries(mapped, Domain.PETS)
    profiles = buckets[FactKind.PET_PROFILE]
    vet_visits = buckets[FactKind.VET_VISIT]
    expenses = buckets[FactKind.EXPENSE]
    vaccinations = buckets[FactKind.VACCINATION]

    log.debug(
        "Pet entries partitioned",
        extra={
            "total": len(mapped),
            "profiles": len(profiles),
            "vet_visits": len(vet_visits),
            "expenses": len(expenses),
            "vaccinations": len(vaccinations),
            "documents": len(buckets[FactKind.PET_DOCUMENT]),
        },
    )

    vet_visits_last30_cost = sum(
        parse_numeric(lookup_first(e.meta, COST_KEYS))
        for e in vet_visits
        if _occurred_since(e, cost_cutoff)
    )
    vet_visit_count_year = sum(1 for e in vet_visits if _occurred_since(e, year_cutoff))

    # Overdue vaccinations are due too
    vaccines_due = 0
    for e in vaccinations:
        due = pick_first_date(e.meta, VACCINE_DUE_KEYS)
        if due is not None and due <= vaccine_horizon:
            vaccines_due += 1

    monthly_cost, basis = _monthly_cost(
        expenses, {id(e) for e in vet_visits}, estimate_cutoff
    )

    log.debug(
        "Pet monthly cost computed",
        extra={"monthly_cost": monthly_cost, "basis": str(basis)},
    )

    return PetsStats(
        has_data=True,
        entries_count=len(mapped),
        pet_profile_count=len(profiles),
        vet_visits_last30_cost=vet_visits_last30_cost,
        vet_visit_count_year=vet_visit_count_year,
        vaccines_due=vaccines_due,
        monthly_cost=monthly_cost,
        monthly_cost_basis=basis,
    )
