"""
Domain Models: Canonical Types for Life-Data Aggregation.

Three layers:
- Record: one caller-owned input item, tolerant of any shape
- MappedEntry: the per-call working unit (record + canonical metadata + date)
- *Stats: one frozen, fully populated result object per domain

Stats carry no identity. Callers recompute them whenever the record
collection changes.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

# =============================================================================
# ENUMS
# =============================================================================


class Domain(StrEnum):
    """Life-data domains with an aggregator."""

    HEALTH = "health"
    PETS = "pets"
    DIGITAL = "digital"
    APPLIANCES = "appliances"


class FactKind(StrEnum):
    """
    Sub-categories a record can be recognised as.

    A record with no recognised kind is UNCLASSIFIED; it still counts toward
    totals such as items_count but feeds no sub-category.
    """

    VITALS = "vitals"
    MEDICATION = "medication"
    BLOOD_PRESSURE = "blood_pressure"
    PET_PROFILE = "pet_profile"
    VET_VISIT = "vet_visit"
    EXPENSE = "expense"
    VACCINATION = "vaccination"
    PET_DOCUMENT = "pet_document"
    SUBSCRIPTION = "subscription"
    UNCLASSIFIED = "unclassified"


class MonthlyCostBasis(StrEnum):
    """How a monthly cost figure was obtained."""

    EXPLICIT = "explicit"  # summed from records flagged recurring
    ESTIMATED = "estimated"  # trailing-window spend used as a proxy
    NONE = "none"  # nothing to base a figure on


# =============================================================================
# INPUT
# =============================================================================


def _clean_id(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Record:
    """
    One user-contributed life-data item.

    ``metadata`` is ``Any``: input paths disagree on its shape.
    """

    id: str | None = None
    title: str = ""
    metadata: Any = None
    created_at: Any = None
    updated_at: Any = None

    @classmethod
    def from_raw(cls, raw: Any) -> "Record":
        """
        Build a Record from a mapping (camelCase or snake_case keys), an
        existing Record, or any object exposing the same attributes.
        """
        if isinstance(raw, Record):
            return raw
        if isinstance(raw, (str, bytes, int, float)):
            return cls()

        if isinstance(raw, Mapping):
            get = raw.get
        else:

            def get(key, default=None):
                return getattr(raw, key, default)

        title = get("title")
        return cls(
            id=_clean_id(get("id")),
            title=title if isinstance(title, str) else ("" if title is None else str(title)),
            metadata=get("metadata"),
            created_at=_first_present(get("createdAt"), get("created_at")),
            updated_at=_first_present(get("updatedAt"), get("updated_at")),
        )


def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class MappedEntry:
    """A record with its canonical metadata and resolved occurrence date."""

    record: Record
    meta: dict[str, Any] = field(default_factory=dict)
    occurred_at: datetime | None = None


# =============================================================================
# OUTPUT
# =============================================================================


class _StatsMixin:
    def to_dict(self) -> dict:
        """Plain dict for JSON rendering; datetimes become ISO strings."""
        result = asdict(self)
        for key, value in result.items():
            if isinstance(value, datetime):
                result[key] = value.isoformat()
        return result


@dataclass(frozen=True)
class HealthStats(_StatsMixin):
    """Health dashboard figures."""

    has_data: bool = False
    items_count: int = 0
    vitals_count: int = 0
    steps: float = 0
    weight: float = 0
    heart_rate: float = 0
    glucose: float = 0
    medication_count: int = 0
    blood_pressure: str = "--/--"
    latest_reading_date: datetime | None = None


@dataclass(frozen=True)
class PetsStats(_StatsMixin):
    """Pet dashboard figures."""

    has_data: bool = False
    entries_count: int = 0
    pet_profile_count: int = 0
    vet_visits_last30_cost: float = 0
    vet_visit_count_year: int = 0
    vaccines_due: int = 0
    monthly_cost: float = 0
    monthly_cost_basis: MonthlyCostBasis = MonthlyCostBasis.NONE

    @property
    def monthly_cost_is_estimate(self) -> bool:
        return self.monthly_cost_basis == MonthlyCostBasis.ESTIMATED


@dataclass(frozen=True)
class DigitalStats(_StatsMixin):
    """Digital life dashboard figures."""

    has_data: bool = False
    entries_count: int = 0
    subscriptions: int = 0
    monthly_cost: float = 0
    passwords: float = 0
    expiring: int = 0


@dataclass(frozen=True)
class AppliancesStats(_StatsMixin):
    """Appliance dashboard figures, computed over deduplicated appliances."""

    has_data: bool = False
    entries_count: int = 0
    count: int = 0
    total_value: float = 0
    under_warranty: int = 0
    needs_maint: int = 0
    warranties_due: int = 0
    total_cost: float = 0


@dataclass(frozen=True)
class DashboardStats:
    """All four domain stats from one call."""

    health: HealthStats = field(default_factory=HealthStats)
    pets: PetsStats = field(default_factory=PetsStats)
    digital: DigitalStats = field(default_factory=DigitalStats)
    appliances: AppliancesStats = field(default_factory=AppliancesStats)

    @property
    def has_data(self) -> bool:
        return any(
            s.has_data for s in (self.health, self.pets, self.digital, self.appliances)
        )

    def to_dict(self) -> dict:
        return {
            "health": self.health.to_dict(),
            "pets": self.pets.to_dict(),
            "digital": self.digital.to_dict(),
            "appliances": self.appliances.to_dict(),
        }
