"""Unit tests for batch row import."""

import pytest

from rowcheck.exceptions import IdentifierNotFoundError
from rowcheck.importer import error_text, import_rows
from rowcheck.store import RecordStore

GOOD_ROW = {
    "email": "me@mail.com",
    "phone": "555.234.5678",
    "first": "Firstname",
    "last": "Lastname",
}


class TestImportRows:
    def test_unknown_identifier_raises(self, store: RecordStore) -> None:
        with pytest.raises(IdentifierNotFoundError):
            import_rows("missing", [GOOD_ROW], store)

    def test_valid_rows_become_records(self, store: RecordStore) -> None:
        summary = import_rows("foo", [GOOD_ROW, dict(GOOD_ROW, first="Ann")], store)
        assert summary.imported == 2
        assert summary.rejected == 0
        assert summary.record_ids == [1, 2]
        assert [r.row for r in store.records("foo")] == [0, 1]

    def test_invalid_rows_become_record_errors(self, store: RecordStore) -> None:
        bad = dict(GOOD_ROW, email="nope", phone="555")
        summary = import_rows("foo", [GOOD_ROW, bad], store)
        assert summary.imported == 1
        assert summary.rejected == 1
        assert len(summary.error_ids) == 1
        errors = store.record_errors("foo")
        assert len(errors) == 1
        assert errors[0].row == 1
        assert errors[0].text == "Email is invalid; Phone must contain exactly 10 digits"
        outcome = summary.rows[1]
        assert outcome.valid is False
        assert outcome.errors == {"email": ["is invalid"], "phone": ["must contain exactly 10 digits"]}

    def test_row_column_is_used(self, store: RecordStore) -> None:
        summary = import_rows("foo", [dict(GOOD_ROW, row="12")], store)
        assert summary.rows[0].row == 12

    def test_bad_row_column_falls_back_to_position(self, store: RecordStore) -> None:
        summary = import_rows("foo", [GOOD_ROW, dict(GOOD_ROW, row="x")], store)
        assert summary.rejected == 1
        assert store.record_errors("foo")[0].row == 1
        assert "Row must be an integer" in store.record_errors("foo")[0].text

    def test_row_identifier_column_is_overridden(self, store: RecordStore) -> None:
        summary = import_rows("foo", [dict(GOOD_ROW, identifier="elsewhere")], store)
        assert summary.imported == 1
        assert store.records("foo")[0].identifier == "foo"


class TestErrorText:
    def test_joins_messages(self) -> None:
        assert error_text(["A is bad", "B is worse"], 255) == "A is bad; B is worse"

    def test_truncates_to_limit(self) -> None:
        text = error_text(["x" * 300], 255)
        assert len(text) == 255
        assert text.endswith("...")
