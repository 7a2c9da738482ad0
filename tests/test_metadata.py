"""
Tests for metadata extraction: canonical map and double-wrapped metadata.
"""

from datetime import date, datetime

from life_metrics.domain_models import Record
from life_metrics.normalize import extract_metadata, is_plain_mapping


class TestExtractMetadata:
    def test_plain_metadata_returned(self):
        record = Record(metadata={"weight": 175, "type": "vitals"})
        assert extract_metadata(record) == {"weight": 175, "type": "vitals"}

    def test_double_wrapped_metadata_unwrapped(self):
        record = Record(metadata={"metadata": {"weight": 180}, "source": "ocr"})
        assert extract_metadata(record) == {"weight": 180}

    def test_nested_metadata_not_a_mapping_ignored(self):
        record = Record(metadata={"metadata": "scan-42", "weight": 160})
        assert extract_metadata(record) == {"metadata": "scan-42", "weight": 160}

    def test_missing_metadata(self):
        assert extract_metadata(Record()) == {}

    def test_none_record(self):
        assert extract_metadata(None) == {}

    def test_non_mapping_metadata(self):
        assert extract_metadata(Record(metadata="weight: 170")) == {}
        assert extract_metadata(Record(metadata=[1, 2, 3])) == {}
        assert extract_metadata(Record(metadata=42)) == {}

    def test_raw_mapping_record(self):
        assert extract_metadata({"metadata": {"steps": 9000}}) == {"steps": 9000}

    def test_result_is_a_copy(self):
        source = {"weight": 175}
        meta = extract_metadata(Record(metadata=source))
        meta["weight"] = 0
        assert source["weight"] == 175


class TestIsPlainMapping:
    def test_dict(self):
        assert is_plain_mapping({}) is True

    def test_dates_are_leaves(self):
        assert is_plain_mapping(datetime(2026, 1, 1)) is False
        assert is_plain_mapping(date(2026, 1, 1)) is False

    def test_list_and_none(self):
        assert is_plain_mapping([]) is False
        assert is_plain_mapping(None) is False


class TestRecordFromRaw:
    def test_camel_case_keys(self):
        record = Record.from_raw(
            {"id": "r1", "title": "Vitals", "createdAt": "2026-01-01", "updatedAt": "2026-01-02"}
        )
        assert record.id == "r1"
        assert record.title == "Vitals"
        assert record.created_at == "2026-01-01"
        assert record.updated_at == "2026-01-02"

    def test_snake_case_keys(self):
        record = Record.from_raw({"created_at": "2026-01-01", "updated_at": "2026-01-02"})
        assert record.created_at == "2026-01-01"
        assert record.updated_at == "2026-01-02"

    def test_blank_id_is_none(self):
        assert Record.from_raw({"id": "  "}).id is None

    def test_numeric_id_stringified(self):
        assert Record.from_raw({"id": 7}).id == "7"

    def test_non_string_title(self):
        assert Record.from_raw({"title": 42}).title == "42"
        assert Record.from_raw({"title": None}).title == ""

    def test_object_with_attributes(self):
        class Row:
            id = "row-1"
            title = "Fridge"
            metadata = {"value": 900}

        record = Record.from_raw(Row())
        assert record.id == "row-1"
        assert record.metadata == {"value": 900}

    def test_garbage_becomes_empty_record(self):
        record = Record.from_raw(12345)
        assert record.id is None
        assert record.title == ""
        assert record.metadata is None

    def test_string_becomes_empty_record(self):
        assert Record.from_raw("fridge") == Record()
