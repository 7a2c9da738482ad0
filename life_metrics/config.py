"""
Centralized configuration for life_metrics.

Environment overrides are read by the CLI and by ``load_thresholds``.
Aggregators never read configuration themselves; they receive a
``Thresholds`` value (or use ``DEFAULT_THRESHOLDS``).
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

# ============================================================
# Environment
# ============================================================

LOG_LEVEL: str = os.environ.get("LIFE_METRICS_LOG_LEVEL", "WARNING")
"""Default log level for the CLI."""

LOG_JSON: bool = os.environ.get("LIFE_METRICS_LOG_JSON", "").lower() in ("1", "true", "yes")
"""Force JSON log lines even on a terminal."""

THRESHOLDS_ENV = "LIFE_METRICS_THRESHOLDS"
"""Env var naming a YAML file that overrides the bundled thresholds."""

BUNDLED_THRESHOLDS_PATH = Path(__file__).parent / "thresholds.yaml"


# ============================================================
# Thresholds
# ============================================================


class ThresholdsError(Exception):
    """Raised when a thresholds file cannot be read or holds invalid values."""

    pass


@dataclass(frozen=True)
class Thresholds:
    """Time windows (in days) used by the per-domain aggregators."""

    vet_cost_window_days: int = 30
    vet_count_window_days: int = 365
    vaccine_due_window_days: int = 30
    pet_expense_estimate_days: int = 30
    digital_expiring_window_days: int = 30
    warranty_due_window_days: int = 30


DEFAULT_THRESHOLDS = Thresholds()


def thresholds_path() -> Path:
    """
    Resolve which thresholds file to load.

    Resolution order:
    1. LIFE_METRICS_THRESHOLDS env var
    2. thresholds.yaml bundled with the package
    """
    override = os.environ.get(THRESHOLDS_ENV)
    if override:
        return Path(override).expanduser()
    return BUNDLED_THRESHOLDS_PATH


def load_thresholds(path: Path | str | None = None) -> Thresholds:
    """
    Load window thresholds from YAML.

    Missing file → defaults. Unknown keys are ignored with a warning.
    Malformed YAML or non-positive windows raise ThresholdsError.
    """
    path = Path(path) if path is not None else thresholds_path()
    if not path.exists():
        logger.info("Thresholds file not found, using defaults", extra={"path": str(path)})
        return DEFAULT_THRESHOLDS

    try:
        with open(path) as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ThresholdsError(f"Failed to load {path}: {e}") from e

    if not isinstance(config, dict):
        raise ThresholdsError(f"{path}: expected a mapping at top level")

    windows = config.get("windows", {}) or {}
    if not isinstance(windows, dict):
        raise ThresholdsError(f"{path}: 'windows' must be a mapping")

    known = {f.name for f in fields(Thresholds)}
    values: dict[str, int] = {}
    for key, value in windows.items():
        if key not in known:
            logger.warning("Ignoring unknown threshold", extra={"key": key, "path": str(path)})
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ThresholdsError(f"{path}: {key} must be a positive integer, got {value!r}")
        values[key] = value

    return Thresholds(**values)
