"""
Normalize Module: total, side-effect-free field readers.

- metadata.py: canonical metadata extraction (one level of double wrapping peeled)
- lookup.py: case-insensitive deep key lookup and synonym helpers
- coercion.py: numeric coercion
- dates.py: date parsing, entry date resolution, recency ordering
- units.py: billing frequency → monthly amounts
- entries.py: records → MappedEntry

Nothing here raises on malformed input; bad values degrade to 0/None/{}.
"""

from .coercion import parse_numeric
from .dates import (
    ENTRY_DATE_KEYS,
    difference_in_days,
    parse_date,
    pick_first_date,
    resolve_entry_date,
    sort_by_date_desc,
)
from .entries import map_entries, map_entry
from .lookup import (
    get_nested_value,
    has_truthy_value,
    lookup_first,
    pick_string_tokens,
)
from .metadata import extract_metadata, is_plain_mapping
from .units import FREQUENCY_KEYS, FREQUENCY_TABLE, frequency_token, to_monthly

__all__ = [
    # Metadata
    "extract_metadata",
    "is_plain_mapping",
    # Lookup
    "get_nested_value",
    "lookup_first",
    "has_truthy_value",
    "pick_string_tokens",
    # Numbers
    "parse_numeric",
    # Dates
    "ENTRY_DATE_KEYS",
    "parse_date",
    "pick_first_date",
    "resolve_entry_date",
    "sort_by_date_desc",
    "difference_in_days",
    # Units
    "FREQUENCY_KEYS",
    "FREQUENCY_TABLE",
    "frequency_token",
    "to_monthly",
    # Entries
    "map_entry",
    "map_entries",
]
