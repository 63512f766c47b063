"""
In-memory persistence for identifiers, records and record errors.

IdentifierRegistry provides the lookup capability the validation engine uses
to resolve identifier keys; RecordStore only persists entities that pass
validation against that registry.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Union

import structlog
from pydantic import BaseModel, Field

from rowcheck.config.settings import ValidationSettings
from rowcheck.exceptions import DuplicateIdentifierError
from rowcheck.models.identifier import Identifier
from rowcheck.models.record import Record, RecordError
from rowcheck.validation.engine import validate
from rowcheck.validation.rules import identifier_key

logger = structlog.get_logger(__name__)

Entity = Union[Record, RecordError]


class SaveResult(BaseModel):
    """Outcome of RecordStore.save: an id on success, field errors otherwise."""

    ok: bool = Field(..., description="True if the entity was persisted")
    id: Optional[int] = Field(default=None, description="Assigned id when persisted")
    errors: Dict[str, List[str]] = Field(default_factory=dict, description="Field -> messages when rejected")


class IdentifierRegistry:
    """Identifiers keyed by their opaque key."""

    def __init__(self) -> None:
        self._identifiers: Dict[str, Identifier] = {}

    def create(self, key: str) -> Identifier:
        """
        Register a new identifier.

        :raises ValueError: If the key is blank (pydantic ValidationError).
        :raises DuplicateIdentifierError: If the key is already registered.
        """
        identifier = Identifier(key=key)
        if key in self._identifiers:
            raise DuplicateIdentifierError(key)
        self._identifiers[key] = identifier
        logger.info("identifier_created", key=key)
        return identifier

    def get(self, key: str) -> Optional[Identifier]:
        """Return the identifier for ``key`` or None."""
        return self._identifiers.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._identifiers

    def __len__(self) -> int:
        return len(self._identifiers)


class RecordStore:
    """Records and record errors, each with a sequential id."""

    def __init__(
        self,
        registry: IdentifierRegistry,
        settings: Optional[ValidationSettings] = None,
    ) -> None:
        self.registry = registry
        self.settings = settings
        self._next_id = 1
        self._records: Dict[int, Record] = {}
        self._record_errors: Dict[int, RecordError] = {}

    def save(self, entity: Entity) -> SaveResult:
        """Persist ``entity`` only if it validates; never raises for invalid data."""
        result = validate(entity, identifier_lookup=self.registry.get, settings=self.settings)
        kind = type(entity).__name__
        if not result.valid:
            logger.info("entity_rejected", kind=kind, row=entity.row, errors=result.errors)
            return SaveResult(ok=False, errors=result.errors)
        entity_id = self._next_id
        self._next_id += 1
        stored = entity.model_copy()
        if isinstance(stored, Record):
            self._records[entity_id] = stored
        else:
            self._record_errors[entity_id] = stored
        logger.debug("entity_saved", kind=kind, id=entity_id, identifier=identifier_key(entity.identifier))
        return SaveResult(ok=True, id=entity_id)

    def get_record(self, entity_id: int) -> Optional[Record]:
        return self._records.get(entity_id)

    def get_record_error(self, entity_id: int) -> Optional[RecordError]:
        return self._record_errors.get(entity_id)

    def records(self, key: Optional[str] = None) -> List[Record]:
        """Saved records in insertion order, optionally for one identifier."""
        return [
            r for r in self._records.values()
            if key is None or identifier_key(r.identifier) == key
        ]

    def record_errors(self, key: Optional[str] = None) -> List[RecordError]:
        """Saved record errors in insertion order, optionally for one identifier."""
        return [
            e for e in self._record_errors.values()
            if key is None or identifier_key(e.identifier) == key
        ]
