"""
Record collection → MappedEntry list (normalize metadata, resolve dates).
"""

from collections.abc import Iterable, Mapping
from typing import Any

from life_metrics.domain_models import MappedEntry, Record

from .dates import resolve_entry_date
from .metadata import extract_metadata


def map_entry(raw: Any) -> MappedEntry:
    record = Record.from_raw(raw)
    meta = extract_metadata(record)
    return MappedEntry(record=record, meta=meta, occurred_at=resolve_entry_date(meta, record))


def map_entries(records: Iterable[Any] | None) -> list[MappedEntry]:
    """
    Map every record once. ``None`` items are skipped; a non-collection
    argument yields an empty list.
    """
    if records is None or isinstance(records, (str, bytes, Mapping)):
        return []
    try:
        items = list(records)
    except TypeError:
        return []
    return [map_entry(raw) for raw in items if raw is not None]
