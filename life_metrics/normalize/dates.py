"""
Date resolution for life-data records.

Every parsed value comes back as an aware UTC datetime or None; invalid
dates never escape. Naive inputs are taken to be UTC. Bare numbers are epoch
milliseconds, matching what browser clients store.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, date, datetime
from numbers import Real
from typing import Any, TypeVar

from life_metrics.domain_models import MappedEntry, Record

# =============================================================================
# CONSTANTS
# =============================================================================

# Event/log timestamps first, generic and forward-looking dates last
ENTRY_DATE_KEYS: tuple[str, ...] = (
    "loggedAt",
    "recordedAt",
    "timestamp",
    "eventDate",
    "performedOn",
    "date",
    "startDate",
    "completedDate",
    "lastVisit",
    "nextDue",
)

_FALLBACK_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %I:%M %p",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

T = TypeVar("T", bound=MappedEntry)


# =============================================================================
# PARSING
# =============================================================================


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _parse_string(text: str) -> datetime | None:
    text = text.strip()
    if not text:
        return None

    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in _FALLBACK_FORMATS:
        try:
            return _as_utc(datetime.strptime(text, fmt))
        except ValueError:
            continue

    return None


def parse_date(value: Any) -> datetime | None:
    """Parse a date-like value into an aware UTC datetime, or None."""
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, datetime):
            return _as_utc(value)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=UTC)
        if isinstance(value, Real):
            millis = float(value)
            if not math.isfinite(millis):
                return None
            return datetime.fromtimestamp(millis / 1000, UTC)
        if isinstance(value, str):
            return _parse_string(value)
    except (OverflowError, OSError, ValueError):
        return None

    return None


def pick_first_date(meta: Mapping | None, keys: Iterable[str]) -> datetime | None:
    """First candidate key of ``meta`` (top level) that parses to a date."""
    if not isinstance(meta, Mapping):
        return None
    for key in keys:
        parsed = parse_date(meta.get(key))
        if parsed is not None:
            return parsed
    return None


def resolve_entry_date(meta: Mapping | None, record: Record) -> datetime | None:
    """
    Best "occurred at" timestamp for a record.

    Metadata candidates in ENTRY_DATE_KEYS order, then the record's
    updated_at, then created_at.
    """
    parsed = pick_first_date(meta, ENTRY_DATE_KEYS)
    if parsed is not None:
        return parsed
    return parse_date(record.updated_at) or parse_date(record.created_at)


# =============================================================================
# ORDERING
# =============================================================================


def _sort_key(entry: MappedEntry) -> tuple[datetime, datetime, str, str, str]:
    # Ties on occurred_at fall back to record timestamps, then identity and
    # content, so the order never depends on input order
    record = entry.record
    stamped = parse_date(record.updated_at) or parse_date(record.created_at) or _EPOCH
    return (
        entry.occurred_at or _EPOCH,
        stamped,
        record.id or "",
        record.title,
        repr(entry.meta),
    )


def sort_by_date_desc(entries: Sequence[T]) -> list[T]:
    """Newest first; undated entries sort as the epoch. Ties break deterministically."""
    return sorted(entries, key=_sort_key, reverse=True)


def difference_in_days(later: datetime, earlier: datetime) -> int:
    """Whole days between two datetimes, truncated toward zero."""
    return int((later - earlier).total_seconds() / 86400)
