"""
Metadata normalization: unwrap a record's raw metadata into one canonical map.

Some input paths store ``{"metadata": {...real fields...}}`` inside the field
that is already the metadata, so one level of accidental wrapping is peeled.
"""

from collections.abc import Mapping
from datetime import date
from typing import Any

from life_metrics.domain_models import Record


def is_plain_mapping(value: Any) -> bool:
    """True for mappings that can be descended into (dates are leaves)."""
    return isinstance(value, Mapping) and not isinstance(value, date)


def extract_metadata(record: Record | Mapping | None) -> dict[str, Any]:
    """
    Return the usable nested metadata map for a record. Never None.

    Accepts a Record or a raw record mapping.
    """
    if record is None:
        return {}

    if isinstance(record, Record):
        raw = record.metadata
    elif isinstance(record, Mapping):
        raw = record.get("metadata")
    else:
        raw = getattr(record, "metadata", None)

    if not is_plain_mapping(raw):
        return {}

    nested = raw.get("metadata")
    if is_plain_mapping(nested):
        return dict(nested)

    return dict(raw)
