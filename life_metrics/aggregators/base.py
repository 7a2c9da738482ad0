"""
Shared folding helpers for the per-domain aggregators.
"""

import math
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime
from typing import Any

from life_metrics.config import DEFAULT_THRESHOLDS, Thresholds
from life_metrics.domain_models import MappedEntry
from life_metrics.normalize import get_nested_value, parse_date, parse_numeric, sort_by_date_desc


def resolve_now(now: Any = None) -> datetime:
    """Aware UTC reference time; callers pin it for reproducible windows."""
    return parse_date(now) or datetime.now(UTC)


def resolve_thresholds(thresholds: Thresholds | None) -> Thresholds:
    return thresholds if thresholds is not None else DEFAULT_THRESHOLDS


def latest_numeric(entries: Sequence[MappedEntry], keys: Iterable[str]) -> float:
    """
    Most recent known value for a scalar fact.

    Walks entries newest first and returns the first synonym that yields a
    number. A record that lacks the fact falls through to older records
    instead of reading as zero. An explicit numeric 0 counts as known.
    """
    keys = tuple(keys)
    for entry in sort_by_date_desc(entries):
        for key in keys:
            value = get_nested_value(entry.meta, key)
            if value is None:
                continue
            parsed = parse_numeric(value)
            if parsed != 0 or (_is_number(value) and value == 0):
                return parsed
    return 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_truthy_flag(value: Any) -> bool:
    """True for True and the strings 'true'/'yes'/'1' (any case)."""
    if value is True:
        return True
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return False
