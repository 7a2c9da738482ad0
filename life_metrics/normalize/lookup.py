"""
Deep key lookup over free-form nested metadata.

The same fact can live at any depth and under any capitalisation, so lookups
are case-insensitive and walk every nested mapping. The walk is breadth-first
in insertion order: a top-level key always wins over a nested one, and the
result is stable for a fixed input. Lists and dates are leaves.
"""

from collections import deque
from collections.abc import Iterable, Mapping
from typing import Any

from .metadata import is_plain_mapping


def get_nested_value(meta: Mapping | None, key: str) -> Any:
    """Return the first value stored under ``key`` at any depth, else None."""
    if not is_plain_mapping(meta):
        return None

    target = key.lower()
    queue: deque[Mapping] = deque([meta])

    while queue:
        current = queue.popleft()
        for k, value in current.items():
            if str(k).lower() == target:
                return value
            if is_plain_mapping(value):
                queue.append(value)

    return None


def lookup_first(meta: Mapping | None, keys: Iterable[str]) -> Any:
    """First non-None value across a synonym list (first match wins)."""
    for key in keys:
        value = get_nested_value(meta, key)
        if value is not None:
            return value
    return None


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def has_truthy_value(meta: Mapping | None, keys: Iterable[str]) -> bool:
    """
    True if any synonym is present with a non-blank value.

    Presence is what matters: ``0`` and ``False`` still count as recorded.
    """
    return any(_is_present(get_nested_value(meta, key)) for key in keys)


def pick_string_tokens(meta: Mapping | None, keys: Iterable[str]) -> list[str]:
    """Lower-cased, non-blank string values for each synonym, in synonym order."""
    tokens = []
    for key in keys:
        value = get_nested_value(meta, key)
        if isinstance(value, str) and value.strip():
            tokens.append(value.strip().lower())
    return tokens
