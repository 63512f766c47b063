"""Pydantic models for identifiers, records and record errors."""

from rowcheck.models.identifier import Identifier
from rowcheck.models.record import Record, RecordError

__all__ = [
    "Identifier",
    "Record",
    "RecordError",
]
