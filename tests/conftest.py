"""
Test configuration: ensures repo root is in sys.path + determinism guards.

Every time-window test pins ``now`` to REF_NOW, and the environment guard
keeps a developer's LIFE_METRICS_* overrides out of the test run.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add repo root to sys.path so tests can import life_metrics without installing
REPO_ROOT = Path(__file__).parent.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from tests.fixtures import REF_NOW  # noqa: E402

# =============================================================================
# DETERMINISM GUARD: no environment leakage
# =============================================================================


@pytest.fixture(autouse=True)
def guard_environment(monkeypatch):
    """Clear LIFE_METRICS_* overrides for every test."""
    for name in ("LIFE_METRICS_THRESHOLDS", "LIFE_METRICS_LOG_LEVEL", "LIFE_METRICS_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now():
    return REF_NOW


@pytest.fixture(autouse=True)
def restore_root_logging():
    """configure_logging() rewires the root logger; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
