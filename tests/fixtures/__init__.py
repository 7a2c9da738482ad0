"""
Test fixtures for deterministic testing.

This module provides:
- records: builders for persistence-shaped record dicts
- REF_NOW: the pinned reference time every window test uses
"""

from .records import REF_NOW, days_ago, make_record

__all__ = ["REF_NOW", "days_ago", "make_record"]
