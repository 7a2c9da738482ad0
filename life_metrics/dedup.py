"""
Deduplication of entries that describe the same physical entity.

Appliances can arrive from two source collections (free-form domain records
and a dedicated appliance table), so the same fridge may appear twice, and
the two copies do not always share a record id. An entry is a duplicate when
its id or its serial number was already claimed by an earlier entry.
First-seen wins; fields are never merged.
"""

import uuid
from collections.abc import Callable, Iterable

from life_metrics.domain_models import MappedEntry
from life_metrics.normalize import get_nested_value

SERIAL_KEYS = ("serialNumber", "serial_number")
NAME_KEYS = ("name",)


def _serial_number(entry: MappedEntry) -> str | None:
    for key in SERIAL_KEYS:
        serial = get_nested_value(entry.meta, key)
        if isinstance(serial, str) and serial.strip():
            return serial.strip().lower()
    return None


def _display_name(entry: MappedEntry) -> str:
    if entry.record.title:
        return entry.record.title
    name = get_nested_value(entry.meta, NAME_KEYS[0])
    if isinstance(name, str) and name:
        return name
    return "appliance"


def appliance_identity_key(entry: MappedEntry) -> str:
    """
    Primary identity key, in priority order:
    1. the record id
    2. the normalized serial number
    3. "<title or name>-<random suffix>", so unidentifiable records are kept
    """
    if entry.record.id:
        return entry.record.id
    serial = _serial_number(entry)
    if serial:
        return serial
    return f"{_display_name(entry)}-{uuid.uuid4().hex[:8]}"


def appliance_identity_keys(entry: MappedEntry) -> list[str]:
    """Every namespaced key that identifies the entity (id and/or serial)."""
    keys = []
    if entry.record.id:
        keys.append(f"id:{entry.record.id}")
    serial = _serial_number(entry)
    if serial:
        keys.append(f"serial:{serial}")
    if not keys:
        keys.append(f"synthetic:{appliance_identity_key(entry)}")
    return keys


def dedupe_entries(
    entries: Iterable[MappedEntry],
    keys_fn: Callable[[MappedEntry], list[str]] = appliance_identity_keys,
) -> list[MappedEntry]:
    """
    At most one entry per physical entity, in first-seen order.

    Keys of discarded duplicates are claimed too, so a chain of partial
    matches (A~B by serial, B~C by id) collapses to A.
    """
    claimed: set[str] = set()
    kept: list[MappedEntry] = []
    for entry in entries:
        keys = keys_fn(entry)
        if not any(key in claimed for key in keys):
            kept.append(entry)
        claimed.update(keys)
    return kept
