"""Identifier model: the opaque key that groups records and record errors."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Identifier(BaseModel):
    """
    Caller-supplied grouping key.

    Records and record errors reference an identifier by its key; they never
    own it.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Opaque identity (e.g. an import batch name)")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Reject blank keys."""
        if not v or not v.strip():
            raise ValueError("Identifier key cannot be blank")
        return v
