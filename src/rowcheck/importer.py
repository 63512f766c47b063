"""
Batch import of raw rows under one identifier.

Valid rows become Records; every invalid row produces a RecordError whose text
lists the row's violations.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

import structlog
from pydantic import BaseModel, Field

from rowcheck.config.settings import get_settings
from rowcheck.exceptions import IdentifierNotFoundError
from rowcheck.models.record import Record, RecordError
from rowcheck.store import RecordStore
from rowcheck.validation.engine import validate
from rowcheck.validation.rules import RuleContext, integer

logger = structlog.get_logger(__name__)

ERROR_TEXT_SEPARATOR = "; "


class RowOutcome(BaseModel):
    """What happened to one input row."""

    row: int = Field(..., description="Row number used for the record or error")
    valid: bool = Field(..., description="Whether the row passed validation")
    errors: Dict[str, List[str]] = Field(default_factory=dict, description="Field -> messages")
    saved_id: Optional[int] = Field(default=None, description="Id of the saved Record or RecordError")


class ImportSummary(BaseModel):
    """Totals and ids for one import batch."""

    identifier: str = Field(..., description="Identifier key the batch was imported under")
    imported: int = Field(default=0, description="Rows saved as records")
    rejected: int = Field(default=0, description="Rows saved as record errors")
    record_ids: List[int] = Field(default_factory=list)
    error_ids: List[int] = Field(default_factory=list)
    rows: List[RowOutcome] = Field(default_factory=list)


def _row_number(record: Record, position: int) -> int:
    """The row's own number when it is a whole number, else its batch position."""
    if integer().passes(record.row, RuleContext()):
        return int(str(record.row).strip()) if isinstance(record.row, str) else int(record.row)
    return position


def error_text(messages: List[str], max_length: int) -> str:
    """Join full messages into a RecordError text that fits ``max_length``."""
    text = ERROR_TEXT_SEPARATOR.join(messages)
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..." if max_length > 3 else text[:max_length]


def import_rows(
    identifier_key: str,
    rows: Iterable[Mapping[str, Any]],
    store: RecordStore,
) -> ImportSummary:
    """
    Validate and save each row under ``identifier_key``.

    Rows without a ``row`` column are numbered by their 0-based position.

    :raises IdentifierNotFoundError: If the key is not registered in the store's registry.
    """
    if store.registry.get(identifier_key) is None:
        raise IdentifierNotFoundError(identifier_key)
    settings = store.settings or get_settings().validation
    summary = ImportSummary(identifier=identifier_key)

    for position, raw in enumerate(rows):
        record = Record.from_row(raw, identifier=identifier_key, row_number=position)
        result = validate(record, identifier_lookup=store.registry.get, settings=settings)
        row_number = _row_number(record, position)
        if result.valid:
            saved = store.save(record)
            summary.imported += 1
            summary.record_ids.append(saved.id)
            summary.rows.append(RowOutcome(row=row_number, valid=True, saved_id=saved.id))
            continue

        failure = RecordError(
            row=row_number,
            text=error_text(result.full_messages(), settings.max_string_length),
            identifier=identifier_key,
        )
        saved = store.save(failure)
        summary.rejected += 1
        if saved.ok:
            summary.error_ids.append(saved.id)
        summary.rows.append(
            RowOutcome(row=row_number, valid=False, errors=result.errors, saved_id=saved.id)
        )

    logger.info(
        "import_finished",
        identifier=identifier_key,
        imported=summary.imported,
        rejected=summary.rejected,
    )
    return summary
