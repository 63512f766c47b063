"""
CLI entry point for rowcheck.

Subcommands: validate, import.
validate checks every row of a CSV/JSON/YAML file and prints per-row results;
import saves valid rows as records and invalid ones as record errors under an
identifier, then prints the summary.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import structlog
import yaml
from pydantic import ValidationError

from rowcheck.config.settings import Settings, get_settings
from rowcheck.exceptions import RowcheckError
from rowcheck.importer import import_rows
from rowcheck.models.record import Record
from rowcheck.rows import load_rows
from rowcheck.store import IdentifierRegistry, RecordStore
from rowcheck.utils.logging import configure_logging
from rowcheck.validation.engine import validate

logger = structlog.get_logger(__name__)


def _load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_yaml(config_path)
    return get_settings()


def _cmd_validate(path: str, identifier: Optional[str], settings: Settings) -> int:
    """Validate each row; exit 0 if all rows pass, 1 otherwise."""
    rows = load_rows(path)
    results = []
    all_valid = True
    for position, raw in enumerate(rows):
        record = Record.from_row(raw, identifier=identifier, row_number=position)
        result = validate(record, settings=settings.validation)
        all_valid = all_valid and result.valid
        results.append({"row": record.row, **result.to_dict()})
    print(json.dumps({"valid": all_valid, "rows": results}, indent=2, default=str))
    return 0 if all_valid else 1


def _cmd_import(path: str, identifier: str, settings: Settings) -> int:
    """Import rows under a fresh identifier and print the summary."""
    rows = load_rows(path)
    registry = IdentifierRegistry()
    registry.create(identifier)
    store = RecordStore(registry, settings=settings.validation)
    summary = import_rows(identifier, rows, store)
    out = summary.model_dump()
    out["record_errors"] = [e.model_dump() for e in store.record_errors(identifier)]
    print(json.dumps(out, indent=2, default=str))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI args and dispatch to subcommands. Returns 0 on success, non-zero on failure."""
    parser = argparse.ArgumentParser(
        description="rowcheck: validate contact rows and record per-row errors.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML settings file (validation, logging). Default: environment / .env.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    val_p = subparsers.add_parser("validate", help="Validate rows and print per-row errors.")
    val_p.add_argument("file", help="Row file (.csv, .json, .yaml).")
    val_p.add_argument(
        "--identifier",
        default=None,
        help="Identifier key applied to every row. Default: each row's 'identifier' column.",
    )

    imp_p = subparsers.add_parser("import", help="Save rows as records and record errors.")
    imp_p.add_argument("file", help="Row file (.csv, .json, .yaml).")
    imp_p.add_argument("--identifier", required=True, help="Identifier key to import under.")

    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args.config)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 2
    configure_logging(settings.logging)

    try:
        if args.command == "validate":
            return _cmd_validate(args.file, args.identifier, settings)
        if args.command == "import":
            return _cmd_import(args.file, args.identifier, settings)
    except RowcheckError as e:
        logger.error("rowcheck_command_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        logger.error("rowcheck_invalid_identifier", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
