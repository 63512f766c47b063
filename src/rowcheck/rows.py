"""Load raw rows from CSV, JSON or YAML files."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Dict, List

import yaml

from rowcheck.exceptions import RowFileError

SUPPORTED_SUFFIXES = (".csv", ".json", ".yaml", ".yml")


def _check_rows(data: Any, path: Path) -> List[Dict[str, Any]]:
    if not isinstance(data, list):
        raise RowFileError(f"{path}: expected a list of rows, got {type(data).__name__}")
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise RowFileError(f"{path}: row {i} is not a mapping")
    return data


def load_rows(path: str | Path) -> List[Dict[str, Any]]:
    """
    Read rows from ``path``.

    CSV files need a header row; JSON and YAML files must hold a list of
    mappings. Empty CSV cells are kept as empty strings.

    :raises RowFileError: If the file is missing, unreadable, not UTF-8, or has an unsupported shape.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise RowFileError(f"{path}: unsupported file type (use one of {', '.join(SUPPORTED_SUFFIXES)})")
    try:
        # utf-8-sig drops a leading BOM so it does not end up in the first header
        encoding = "utf-8-sig" if suffix == ".csv" else "utf-8"
        with open(path, encoding=encoding, newline="") as f:
            if suffix == ".csv":
                return [dict(row) for row in csv.DictReader(f)]
            if suffix == ".json":
                return _check_rows(json.load(f), path)
            return _check_rows(yaml.safe_load(f) or [], path)
    except OSError as e:
        raise RowFileError(f"{path}: {e}") from e
    except UnicodeDecodeError as e:
        raise RowFileError(f"{path}: not valid UTF-8: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError, csv.Error) as e:
        raise RowFileError(f"{path}: could not parse rows: {e}") from e
