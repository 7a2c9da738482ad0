"""
Domain Classifiers: data-driven sub-category recognition.

Each sub-category is a TagRule applied in two steps:
1. Explicit tag: the first present tag field (deep lookup) is compared with
   the rule's tokens (substring, normalized-exact, or strict equality).
2. Structural fallback: every field group in ``structure`` must have at
   least one present field.

Rules are plain tables so behaviour can be read and tested without tracing
conditionals. All predicates are total: any mapping, including {}, gives a
bool.

Mutual exclusion (pets): an explicit profile tag makes a record a profile
and nothing else; any sibling match (vet visit, expense, vaccination,
document) or a disqualifying tag keeps a record out of the profile bucket.
Health kinds are independent because they feed separate counters.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from life_metrics.domain_models import Domain, FactKind, MappedEntry
from life_metrics.normalize import get_nested_value, has_truthy_value, lookup_first, parse_numeric

# =============================================================================
# RULE MODEL
# =============================================================================


class TagMatch(Enum):
    """How a tag value is compared with a rule's tokens."""

    SUBSTRING = "substring"  # token contained in the normalized tag
    EXACT = "exact"  # normalized tag equals a token
    STRICT = "strict"  # raw tag value equals a token, no normalization


def normalize_tag(value: Any) -> str:
    """Lower-case, trimmed, separators folded to '-'. Non-strings give ''."""
    if not isinstance(value, str):
        return ""
    return re.sub(r"[\s_]+", "-", value.strip().lower())


@dataclass(frozen=True)
class TagRule:
    """One sub-category: explicit tag tokens plus a structural fallback."""

    kind: FactKind
    tag_keys: tuple[str, ...]
    tokens: tuple[str, ...] = ()
    match: TagMatch = TagMatch.SUBSTRING
    structure: tuple[tuple[str, ...], ...] = ()

    def tag_matches(self, meta: Mapping) -> bool:
        raw = lookup_first(meta, self.tag_keys)
        if self.match is TagMatch.STRICT:
            return isinstance(raw, str) and raw in self.tokens
        tag = normalize_tag(raw)
        if not tag:
            return False
        if self.match is TagMatch.EXACT:
            return tag in self.tokens
        return any(token in tag for token in self.tokens)

    def structure_matches(self, meta: Mapping) -> bool:
        if not self.structure:
            return False
        return all(has_truthy_value(meta, group) for group in self.structure)

    def matches(self, meta: Mapping) -> bool:
        return self.tag_matches(meta) or self.structure_matches(meta)


# =============================================================================
# HEALTH
# =============================================================================

HEALTH_TAG_KEYS = ("recordType", "type", "logType")

VITALS_RULE = TagRule(
    kind=FactKind.VITALS,
    tag_keys=HEALTH_TAG_KEYS,
    tokens=("vital", "fitness", "wellness"),
    structure=(("steps", "weight", "heartRate", "hr", "bpm", "glucose"),),
)

MEDICATION_RULE = TagRule(
    kind=FactKind.MEDICATION,
    tag_keys=HEALTH_TAG_KEYS,
    tokens=("medication", "pharmacy"),
    structure=(("medicationName", "dosage", "prescriber"),),
)

BLOOD_PRESSURE_RULE = TagRule(
    kind=FactKind.BLOOD_PRESSURE,
    tag_keys=HEALTH_TAG_KEYS,
    structure=(("systolic",), ("diastolic",)),
)

HEALTH_RULES: tuple[TagRule, ...] = (VITALS_RULE, MEDICATION_RULE, BLOOD_PRESSURE_RULE)

_BP_TEXT = re.compile(r"(\d{2,3}(?:\.\d+)?)\s*/\s*(\d{2,3}(?:\.\d+)?)")


def blood_pressure_reading(meta: Mapping) -> tuple[float, float] | None:
    """
    (systolic, diastolic) when both are positive, from separate fields
    (at any depth) or a "120/80" style ``bloodPressure`` string.
    """
    systolic = parse_numeric(get_nested_value(meta, "systolic"))
    diastolic = parse_numeric(get_nested_value(meta, "diastolic"))
    if systolic > 0 and diastolic > 0:
        return systolic, diastolic

    text = get_nested_value(meta, "bloodPressure")
    if isinstance(text, str):
        match = _BP_TEXT.search(text)
        if match:
            return float(match.group(1)), float(match.group(2))
    return None


def is_vitals_entry(meta: Mapping) -> bool:
    return VITALS_RULE.matches(meta)


def is_medication_entry(meta: Mapping) -> bool:
    return MEDICATION_RULE.matches(meta)


def is_blood_pressure_entry(meta: Mapping) -> bool:
    if BLOOD_PRESSURE_RULE.structure_matches(meta):
        return True
    return isinstance(get_nested_value(meta, "bloodPressure"), str) and (
        blood_pressure_reading(meta) is not None
    )


# =============================================================================
# PETS
# =============================================================================

PET_TAG_KEYS = ("type", "itemType", "category")

PET_PROFILE_RULE = TagRule(
    kind=FactKind.PET_PROFILE,
    tag_keys=PET_TAG_KEYS,
    tokens=("pet-profile", "profile", "pet"),
    match=TagMatch.EXACT,
    structure=(("species",), ("name", "petName")),
)

# Explicit tags that can never describe a profile
PROFILE_DISQUALIFYING_TAGS: tuple[str, ...] = ("cost", "vaccination", "document")

VET_VISIT_RULE = TagRule(
    kind=FactKind.VET_VISIT,
    tag_keys=PET_TAG_KEYS,
    tokens=("vet", "appointment", "exam", "checkup"),
    structure=(("veterinarian", "clinic", "visitType"),),
)

EXPENSE_RULE = TagRule(
    kind=FactKind.EXPENSE,
    tag_keys=PET_TAG_KEYS,
    tokens=("expense", "cost", "food", "supplies"),
    structure=(("amount", "cost", "monthlyCost", "expenseAmount"),),
)

VACCINATION_RULE = TagRule(
    kind=FactKind.VACCINATION,
    tag_keys=PET_TAG_KEYS,
    tokens=("vaccine", "vaccination"),
    structure=(("vaccine", "vaccinationDate", "nextDue"),),
)

# Tag only: documents have no reliable structural signature
PET_DOCUMENT_RULE = TagRule(
    kind=FactKind.PET_DOCUMENT,
    tag_keys=PET_TAG_KEYS,
    tokens=("document",),
)

PET_SIBLING_RULES: tuple[TagRule, ...] = (
    VET_VISIT_RULE,
    EXPENSE_RULE,
    VACCINATION_RULE,
    PET_DOCUMENT_RULE,
)


def _recognize_pet(meta: Mapping) -> frozenset[FactKind]:
    if PET_PROFILE_RULE.tag_matches(meta):
        return frozenset({FactKind.PET_PROFILE})

    # Untagged records with visit, cost, vaccine or document signals are counted
    # there even when they also carry species and name; only a profile tag
    # puts such a record in the profile bucket
    siblings = frozenset(rule.kind for rule in PET_SIBLING_RULES if rule.matches(meta))
    if siblings:
        return siblings

    tag = normalize_tag(lookup_first(meta, PET_TAG_KEYS))
    if tag in PROFILE_DISQUALIFYING_TAGS:
        return frozenset()

    if PET_PROFILE_RULE.structure_matches(meta):
        return frozenset({FactKind.PET_PROFILE})
    return frozenset()


def is_pet_profile(meta: Mapping) -> bool:
    return FactKind.PET_PROFILE in _recognize_pet(meta)


def is_vet_visit(meta: Mapping) -> bool:
    return FactKind.VET_VISIT in _recognize_pet(meta)


def is_expense_entry(meta: Mapping) -> bool:
    return FactKind.EXPENSE in _recognize_pet(meta)


def is_vaccination(meta: Mapping) -> bool:
    return FactKind.VACCINATION in _recognize_pet(meta)


def is_pet_document(meta: Mapping) -> bool:
    return FactKind.PET_DOCUMENT in _recognize_pet(meta)


# =============================================================================
# DIGITAL LIFE
# =============================================================================

# Strict equality: one-time asset purchases never reach monthly rollups
SUBSCRIPTION_RULE = TagRule(
    kind=FactKind.SUBSCRIPTION,
    tag_keys=("type",),
    tokens=("subscription",),
    match=TagMatch.STRICT,
)


def is_subscription(meta: Mapping) -> bool:
    return SUBSCRIPTION_RULE.tag_matches(meta)


# =============================================================================
# RECOGNITION
# =============================================================================

DOMAIN_KINDS: dict[Domain, tuple[FactKind, ...]] = {
    Domain.HEALTH: (FactKind.VITALS, FactKind.MEDICATION, FactKind.BLOOD_PRESSURE),
    Domain.PETS: (
        FactKind.PET_PROFILE,
        FactKind.VET_VISIT,
        FactKind.EXPENSE,
        FactKind.VACCINATION,
        FactKind.PET_DOCUMENT,
    ),
    Domain.DIGITAL: (FactKind.SUBSCRIPTION,),
    Domain.APPLIANCES: (),
}


def _recognize_health(meta: Mapping) -> frozenset[FactKind]:
    kinds = set()
    if is_vitals_entry(meta):
        kinds.add(FactKind.VITALS)
    if is_medication_entry(meta):
        kinds.add(FactKind.MEDICATION)
    if is_blood_pressure_entry(meta):
        kinds.add(FactKind.BLOOD_PRESSURE)
    return frozenset(kinds)


def recognize_facts(meta: Mapping | None, domain: Domain | str) -> frozenset[FactKind]:
    """
    Every sub-category ``meta`` belongs to within ``domain``.

    Returns {UNCLASSIFIED} when nothing is recognised (appliances always).
    """
    if not isinstance(meta, Mapping):
        meta = {}
    domain = Domain(domain)

    if domain is Domain.HEALTH:
        kinds = _recognize_health(meta)
    elif domain is Domain.PETS:
        kinds = _recognize_pet(meta)
    elif domain is Domain.DIGITAL:
        kinds = frozenset({FactKind.SUBSCRIPTION}) if is_subscription(meta) else frozenset()
    else:
        kinds = frozenset()

    return kinds or frozenset({FactKind.UNCLASSIFIED})


def partition_entries(
    entries: Iterable[MappedEntry], domain: Domain | str
) -> dict[FactKind, list[MappedEntry]]:
    """
    Bucket entries by recognised kind, preserving input order.

    Every kind of the domain (plus UNCLASSIFIED) is present as a key.
    """
    domain = Domain(domain)
    buckets: dict[FactKind, list[MappedEntry]] = {
        kind: [] for kind in (*DOMAIN_KINDS[domain], FactKind.UNCLASSIFIED)
    }
    for entry in entries:
        for kind in recognize_facts(entry.meta, domain):
            buckets[kind].append(entry)
    return buckets
