"""
Billing-frequency normalization to monthly amounts.

The frequency table is ordered: "biweek" must be tested before the generic
"week" substring or biweekly charges would be multiplied by four.
"""

from collections.abc import Mapping

from .lookup import pick_string_tokens

FREQUENCY_KEYS: tuple[str, ...] = (
    "frequency",
    "billingFrequency",
    "billingCycle",
    "interval",
    "renewalFrequency",
)

# (substring token, numerator, denominator): monthly = amount * num / den
FREQUENCY_TABLE: tuple[tuple[str, int, int], ...] = (
    ("biweek", 2, 1),
    ("annual", 1, 12),
    ("year", 1, 12),
    ("quarter", 1, 3),
    ("week", 4, 1),
    ("day", 30, 1),
)


def frequency_token(meta: Mapping | None) -> str:
    """The first non-blank billing frequency string, lower-cased ("" if none)."""
    tokens = pick_string_tokens(meta, FREQUENCY_KEYS)
    return tokens[0] if tokens else ""


def monthly_ratio(token: str) -> tuple[int, int]:
    """(numerator, denominator) for a frequency token; (1, 1) when unrecognised."""
    token = token.lower()
    for needle, num, den in FREQUENCY_TABLE:
        if needle in token:
            return num, den
    return 1, 1


def to_monthly(amount: float, meta: Mapping | None) -> float:
    """Convert ``amount`` billed at the record's frequency into a monthly amount."""
    num, den = monthly_ratio(frequency_token(meta))
    return amount * num / den
