"""Unit tests for the CLI (main.py): validate and import subcommands, exit codes."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from rowcheck.main import main

pytestmark = pytest.mark.cli

ROWS = [
    {"row": 0, "email": "me@mail.com", "phone": "555.234.5678", "first": "Firstname", "last": "Lastname"},
    {"row": 1, "email": "bad@", "phone": "555.234.5678", "first": "Ann", "last": "Lee"},
]


@pytest.fixture
def rows_file(tmp_path: Path) -> Path:
    path = tmp_path / "rows.json"
    path.write_text(json.dumps(ROWS), encoding="utf-8")
    return path


class TestValidateCommand:
    def test_reports_each_row(self, rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["validate", str(rows_file), "--identifier", "foo"])
        out = json.loads(capsys.readouterr().out)
        assert code == 1
        assert out["valid"] is False
        assert out["rows"][0] == {"row": 0, "valid": True, "errors": {}}
        assert out["rows"][1]["errors"] == {"email": ["is invalid"]}

    def test_all_valid_exits_zero(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps(ROWS[:1]), encoding="utf-8")
        assert main(["validate", str(path), "--identifier", "foo"]) == 0
        assert json.loads(capsys.readouterr().out)["valid"] is True

    def test_missing_identifier_is_reported(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "rows.json"
        path.write_text(json.dumps(ROWS[:1]), encoding="utf-8")
        assert main(["validate", str(path)]) == 1
        out = json.loads(capsys.readouterr().out)
        assert out["rows"][0]["errors"] == {"identifier": ["must exist"]}


class TestImportCommand:
    def test_prints_summary(self, rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["import", str(rows_file), "--identifier", "batch-1"])
        out = json.loads(capsys.readouterr().out)
        assert code == 0
        assert out["identifier"] == "batch-1"
        assert out["imported"] == 1
        assert out["rejected"] == 1
        assert out["record_errors"] == [{"row": 1, "text": "Email is invalid", "identifier": "batch-1"}]

    def test_identifier_is_required(self, rows_file: Path) -> None:
        with pytest.raises(SystemExit):
            main(["import", str(rows_file)])


class TestErrors:
    def test_unsupported_file_exits_two(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "rows.txt"
        path.write_text("x", encoding="utf-8")
        assert main(["validate", str(path)]) == 2
        assert "unsupported file type" in capsys.readouterr().err

    def test_missing_config_exits_two(self, rows_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--config", "/nonexistent/rowcheck.yaml", "validate", str(rows_file)]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_malformed_config_exits_two(
        self, tmp_path: Path, rows_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "rowcheck.yaml"
        config.write_text("validation: [unclosed\n", encoding="utf-8")
        assert main(["--config", str(config), "validate", str(rows_file)]) == 2
        assert "invalid configuration" in capsys.readouterr().err

    def test_non_utf8_rows_exit_two(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "rows.csv"
        path.write_bytes(b"row,email\n\xff\xfe\n")
        assert main(["validate", str(path), "--identifier", "foo"]) == 2
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_csv_with_byte_order_mark_validates(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "rows.csv"
        path.write_text(
            "\ufeffrow,email,phone,first,last\n4,me@mail.com,555.234.5678,Ann,Lee\n", encoding="utf-8"
        )
        assert main(["validate", str(path), "--identifier", "foo"]) == 0
        assert json.loads(capsys.readouterr().out)["rows"][0]["row"] == "4"

    def test_config_file_changes_limits(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        config = tmp_path / "rowcheck.yaml"
        config.write_text("validation:\n  phone_digits: 7\n", encoding="utf-8")
        path = tmp_path / "rows.json"
        path.write_text(json.dumps([dict(ROWS[0], phone="555-1234")]), encoding="utf-8")
        assert main(["--config", str(config), "validate", str(path), "--identifier", "foo"]) == 0
