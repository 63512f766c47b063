"""
Validation result models.

ValidationResult collects every rule failure for one candidate; it is returned,
never raised.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class RuleFailure(BaseModel):
    """A single failed rule on a single field."""

    field: str = Field(..., description="Field the rule was evaluated on")
    rule: str = Field(..., description="Rule name (e.g. 'presence', 'phone_digits')")
    message: str = Field(..., description="Stable, human-readable message")


class ValidationResult(BaseModel):
    """Outcome of validating one record: aggregate verdict plus per-field messages."""

    failures: List[RuleFailure] = Field(default_factory=list, description="Every failed rule, in evaluation order")

    @property
    def valid(self) -> bool:
        """True when no rule failed."""
        return not self.failures

    @property
    def errors(self) -> Dict[str, List[str]]:
        """Messages keyed by field name."""
        grouped: Dict[str, List[str]] = {}
        for failure in self.failures:
            grouped.setdefault(failure.field, []).append(failure.message)
        return grouped

    def add(self, field: str, rule: str, message: str) -> None:
        """Record a failed rule."""
        self.failures.append(RuleFailure(field=field, rule=rule, message=message))

    def merge(self, other: ValidationResult) -> None:
        """Merge another validation result into this one."""
        self.failures.extend(other.failures)

    def messages_for(self, field: str) -> List[str]:
        """Messages for one field (empty if the field passed)."""
        return [f.message for f in self.failures if f.field == field]

    def failed_rules(self, field: str) -> List[str]:
        """Names of the rules that failed on one field."""
        return [f.rule for f in self.failures if f.field == field]

    def full_messages(self) -> List[str]:
        """Messages prefixed with a humanized field name, e.g. 'Email is invalid'."""
        return [f"{_humanize(f.field)} {f.message}" for f in self.failures]

    def to_dict(self) -> Dict[str, object]:
        """JSON-friendly summary."""
        return {"valid": self.valid, "errors": self.errors}

    def __str__(self) -> str:
        return "; ".join(self.full_messages()) if self.failures else "Valid"


def _humanize(field: str) -> str:
    return field.replace("_", " ").capitalize()
