"""
Tests for date parsing, entry date resolution and recency ordering.
"""

from datetime import UTC, date, datetime, timedelta, timezone

from life_metrics.domain_models import MappedEntry, Record
from life_metrics.normalize import (
    difference_in_days,
    parse_date,
    pick_first_date,
    resolve_entry_date,
    sort_by_date_desc,
)


class TestParseDate:
    def test_iso_with_z(self):
        assert parse_date("2026-03-01T10:00:00Z") == datetime(2026, 3, 1, 10, 0, tzinfo=UTC)

    def test_iso_date_only(self):
        assert parse_date("2026-03-01") == datetime(2026, 3, 1, tzinfo=UTC)

    def test_offset_converted_to_utc(self):
        parsed = parse_date("2026-03-01T10:00:00+02:00")
        assert parsed == datetime(2026, 3, 1, 8, 0, tzinfo=UTC)
        assert parsed.tzinfo == UTC

    def test_human_formats(self):
        assert parse_date("03/01/2026") == datetime(2026, 3, 1, tzinfo=UTC)
        assert parse_date("March 1, 2026") == datetime(2026, 3, 1, tzinfo=UTC)
        assert parse_date("Mar 1, 2026") == datetime(2026, 3, 1, tzinfo=UTC)

    def test_naive_datetime_taken_as_utc(self):
        assert parse_date(datetime(2026, 3, 1, 9)) == datetime(2026, 3, 1, 9, tzinfo=UTC)

    def test_aware_datetime_normalized(self):
        tz = timezone(timedelta(hours=-5))
        assert parse_date(datetime(2026, 3, 1, 9, tzinfo=tz)) == datetime(2026, 3, 1, 14, tzinfo=UTC)

    def test_date_object(self):
        assert parse_date(date(2026, 3, 1)) == datetime(2026, 3, 1, tzinfo=UTC)

    def test_epoch_millis(self):
        assert parse_date(0) == datetime(1970, 1, 1, tzinfo=UTC)
        assert parse_date(86_400_000) == datetime(1970, 1, 2, tzinfo=UTC)

    def test_invalid_values(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("not a date") is None
        assert parse_date("2026-13-45") is None
        assert parse_date(True) is None
        assert parse_date(float("nan")) is None
        assert parse_date(1e30) is None
        assert parse_date({"date": "2026-01-01"}) is None


class TestPickFirstDate:
    def test_priority_order(self):
        meta = {"expiryDate": "2026-02-01", "renewalDate": "2026-01-01"}
        assert pick_first_date(meta, ["renewalDate", "expiryDate"]) == datetime(2026, 1, 1, tzinfo=UTC)

    def test_skips_unparsable(self):
        meta = {"renewalDate": "soon", "expiryDate": "2026-02-01"}
        assert pick_first_date(meta, ["renewalDate", "expiryDate"]) == datetime(2026, 2, 1, tzinfo=UTC)

    def test_non_mapping(self):
        assert pick_first_date(None, ["date"]) is None


class TestResolveEntryDate:
    def test_log_timestamp_beats_generic_date(self):
        meta = {"date": "2026-01-01", "loggedAt": "2026-02-01"}
        assert resolve_entry_date(meta, Record()) == datetime(2026, 2, 1, tzinfo=UTC)

    def test_falls_back_to_updated_at(self):
        record = Record(updated_at="2026-04-01", created_at="2026-03-01")
        assert resolve_entry_date({}, record) == datetime(2026, 4, 1, tzinfo=UTC)

    def test_falls_back_to_created_at(self):
        record = Record(created_at="2026-03-01")
        assert resolve_entry_date({"date": "garbage"}, record) == datetime(2026, 3, 1, tzinfo=UTC)

    def test_unresolvable_is_none(self):
        assert resolve_entry_date({}, Record()) is None
        assert resolve_entry_date({}, Record(created_at="nope")) is None


class TestSortByDateDesc:
    def _entry(self, occurred, title=""):
        return MappedEntry(record=Record(title=title), meta={}, occurred_at=occurred)

    def test_newest_first(self):
        old = self._entry(datetime(2026, 1, 1, tzinfo=UTC), "old")
        new = self._entry(datetime(2026, 5, 1, tzinfo=UTC), "new")
        assert [e.record.title for e in sort_by_date_desc([old, new])] == ["new", "old"]

    def test_undated_sorts_last(self):
        undated = self._entry(None, "undated")
        dated = self._entry(datetime(2026, 1, 1, tzinfo=UTC), "dated")
        assert [e.record.title for e in sort_by_date_desc([undated, dated])] == ["dated", "undated"]

    def test_ties_do_not_depend_on_input_order(self):
        when = datetime(2026, 1, 1, tzinfo=UTC)
        a, b = self._entry(when, "a"), self._entry(when, "b")
        forward = [e.record.title for e in sort_by_date_desc([a, b])]
        backward = [e.record.title for e in sort_by_date_desc([b, a])]
        assert forward == backward

    def test_ties_broken_by_record_timestamp(self):
        when = datetime(2026, 1, 1, tzinfo=UTC)
        older = MappedEntry(record=Record(title="older", updated_at="2026-01-02"), occurred_at=when)
        newer = MappedEntry(record=Record(title="newer", updated_at="2026-01-05"), occurred_at=when)
        assert [e.record.title for e in sort_by_date_desc([older, newer])] == ["newer", "older"]

    def test_does_not_mutate_input(self):
        entries = [self._entry(None, "x"), self._entry(datetime(2026, 1, 1, tzinfo=UTC), "y")]
        sort_by_date_desc(entries)
        assert entries[0].record.title == "x"


class TestDifferenceInDays:
    def test_whole_days(self):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        assert difference_in_days(base + timedelta(days=3, hours=23), base) == 3

    def test_truncates_toward_zero(self):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        assert difference_in_days(base - timedelta(hours=12), base) == 0
        assert difference_in_days(base - timedelta(days=1, hours=1), base) == -1
