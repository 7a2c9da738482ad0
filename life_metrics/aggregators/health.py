"""
Health aggregator: vitals, blood pressure, medications.

Scalar vitals are "most recent known value": the newest record that carries
the fact wins, older records fill in what newer ones lack. Weight and heart
rate fall back to parsing record titles ("Weight: 190 lbs", "HR: 72") only
when no structured field anywhere yields a value.
"""

import logging
import re
from collections.abc import Iterable
from typing import Any

from life_metrics.classifiers import blood_pressure_reading, partition_entries
from life_metrics.domain_models import Domain, FactKind, HealthStats, MappedEntry
from life_metrics.normalize import map_entries, sort_by_date_desc

from .base import latest_numeric, round_half_up

logger = logging.getLogger(__name__)
_DEFAULT_LOGGER = logger

# Synonyms, in preference order
STEPS_KEYS = ("steps",)
WEIGHT_KEYS = ("weight",)
HEART_RATE_KEYS = ("heartRate", "hr", "bpm")
GLUCOSE_KEYS = ("glucose", "bloodGlucose")

NO_BLOOD_PRESSURE = "--/--"

_WEIGHT_TITLE = re.compile(r"(\d+(?:\.\d+)?)\s*lbs?", re.IGNORECASE)
_HEART_RATE_TITLE = re.compile(r"(?:hr|heart\s*rate):\s*(\d+)|(\d+)\s*bpm", re.IGNORECASE)


def _weight_from_title(title: str) -> float:
    if "lb" not in title and "weight" not in title:
        return 0
    match = _WEIGHT_TITLE.search(title)
    return float(match.group(1)) if match else 0


def _heart_rate_from_title(title: str) -> float:
    if "bpm" not in title and "heart" not in title and "hr:" not in title:
        return 0
    match = _HEART_RATE_TITLE.search(title)
    if not match:
        return 0
    return float(match.group(1) or match.group(2))


def _title_fallback(
    entries: list[MappedEntry], weight: float, heart_rate: float
) -> tuple[float, float]:
    for entry in sort_by_date_desc(entries):
        title = entry.record.title.lower()
        if weight == 0:
            weight = _weight_from_title(title)
        if heart_rate == 0:
            heart_rate = _heart_rate_from_title(title)
        if weight > 0 and heart_rate > 0:
            break
    return weight, heart_rate


def _latest_blood_pressure(entries: list[MappedEntry]) -> str:
    for entry in sort_by_date_desc(entries):
        reading = blood_pressure_reading(entry.meta)
        if reading is not None:
            systolic, diastolic = reading
            return f"{round_half_up(systolic)}/{round_half_up(diastolic)}"
    return NO_BLOOD_PRESSURE


def compute_health_stats(
    records: Iterable[Any] | None,
    *,
    logger: logging.Logger | None = None,
) -> HealthStats:
    """Fold health records into HealthStats. Never raises."""
    log = logger if logger is not None else _DEFAULT_LOGGER
    mapped = map_entries(records)
    if not mapped:
        return HealthStats()

    buckets = partition_entries(mapped, Domain.HEALTH)
    vitals = buckets[FactKind.VITALS]
    medications = buckets[FactKind.MEDICATION]
    bp_entries = buckets[FactKind.BLOOD_PRESSURE]

    log.debug(
        "Health entries partitioned",
        extra={
            "total": len(mapped),
            "vitals": len(vitals),
            "medications": len(medications),
            "bp_entries": len(bp_entries),
        },
    )

    weight = latest_numeric(vitals, WEIGHT_KEYS)
    heart_rate = latest_numeric(vitals, HEART_RATE_KEYS)
    # Glucose often arrives on lab results, so search every entry
    glucose = latest_numeric(mapped, GLUCOSE_KEYS)
    steps = latest_numeric(vitals, STEPS_KEYS) or latest_numeric(mapped, STEPS_KEYS)

    if weight == 0 or heart_rate == 0:
        weight, heart_rate = _title_fallback(mapped, weight, heart_rate)

    blood_pressure = _latest_blood_pressure(bp_entries)
    latest_vitals = sort_by_date_desc(vitals)
    latest_reading_date = latest_vitals[0].occurred_at if latest_vitals else None

    log.debug(
        "Health stats computed",
        extra={
            "weight": weight,
            "heart_rate": heart_rate,
            "glucose": glucose,
            "steps": steps,
            "blood_pressure": blood_pressure,
        },
    )

    return HealthStats(
        has_data=True,
        items_count=len(mapped),
        vitals_count=len(vitals),
        steps=steps,
        weight=weight,
        heart_rate=heart_rate,
        glucose=glucose,
        medication_count=len(medications),
        blood_pressure=blood_pressure,
        latest_reading_date=latest_reading_date,
    )
