"""
Pydantic models for imported rows and the failures reported against them.

Fields are typed loosely and default to None; the validation engine judges
their values, construction does not.
"""

from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class Record(BaseModel):
    """One imported data row with contact fields."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    FIELDS: ClassVar[Tuple[str, ...]] = ("row", "email", "phone", "first", "last", "identifier")

    row: Any = Field(default=None, description="Row number in the source batch")
    email: Any = Field(default=None, description="Contact email address")
    phone: Any = Field(default=None, description="Ten-digit phone number, punctuation allowed")
    first: Any = Field(default=None, description="First name (letters only)")
    last: Any = Field(default=None, description="Last name (letters only, needs first)")
    identifier: Any = Field(default=None, description="Identifier or its key")

    @classmethod
    def from_row(
        cls,
        row: Mapping[str, Any],
        identifier: Any = None,
        row_number: Any = None,
    ) -> "Record":
        """
        Build a Record from a raw row mapping (CSV/JSON/YAML).

        Unknown columns are ignored, string columns are stringified, and
        ``row_number`` is used when the mapping has no ``row`` column.
        """
        values: Dict[str, Any] = {
            name: _as_text(row.get(name)) for name in ("email", "phone", "first", "last")
        }
        values["row"] = row.get("row", row_number)
        values["identifier"] = identifier if identifier is not None else _as_text(row.get("identifier"))
        return cls(**values)

    def field_values(self) -> Dict[str, Any]:
        """Current values keyed by field name."""
        return {name: getattr(self, name) for name in self.FIELDS}


class RecordError(BaseModel):
    """A validation failure reported for one row."""

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    FIELDS: ClassVar[Tuple[str, ...]] = ("row", "text", "identifier")

    row: Any = Field(default=None, description="Row number the failure refers to")
    text: Any = Field(default=None, description="Human-readable failure summary")
    identifier: Any = Field(default=None, description="Identifier or its key")

    def field_values(self) -> Dict[str, Any]:
        """Current values keyed by field name."""
        return {name: getattr(self, name) for name in self.FIELDS}
