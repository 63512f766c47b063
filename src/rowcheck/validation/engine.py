"""
Validation engine.

Runs every rule of a rule set against a candidate's field values and collects
all failures into a ValidationResult. Rules are never short-circuited, so a
single pass reports every violation. Nothing here raises for invalid data.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import structlog
from pydantic import BaseModel

from rowcheck.config.settings import ValidationSettings, get_settings
from rowcheck.models.record import Record, RecordError
from rowcheck.validation.result import ValidationResult
from rowcheck.validation.rules import (
    FieldRule,
    IdentifierLookup,
    RuleContext,
    allow_blank_when_blank,
    allowed_characters,
    alpha_only,
    association,
    digit_count,
    email_format,
    integer,
    max_length,
    min_length,
    presence,
    requires_present,
)

logger = structlog.get_logger(__name__)

RuleSet = Mapping[str, Sequence[FieldRule]]
Candidate = Union[Record, RecordError, Mapping[str, Any]]


# -----------------------------------------------------------------------------
# Default rule sets
# -----------------------------------------------------------------------------


def record_rules(settings: Optional[ValidationSettings] = None) -> Dict[str, List[FieldRule]]:
    """Rules for a Record, built from ValidationSettings."""
    s = settings or get_settings().validation
    return {
        "row": [presence(), integer()],
        "identifier": [association()],
        "email": [presence(), email_format(), max_length(s.max_string_length)],
        "phone": [
            presence(),
            allowed_characters(s.phone_ignored_characters),
            digit_count(s.phone_digits, s.phone_ignored_characters),
        ],
        "first": [min_length(s.name_min_length), max_length(s.max_string_length), alpha_only()],
        "last": [
            allow_blank_when_blank("first", min_length(s.name_min_length)),
            max_length(s.max_string_length),
            requires_present("first"),
            alpha_only(),
        ],
    }


def record_error_rules(settings: Optional[ValidationSettings] = None) -> Dict[str, List[FieldRule]]:
    """Rules for a RecordError, built from ValidationSettings."""
    s = settings or get_settings().validation
    return {
        "row": [presence(), integer()],
        "identifier": [association()],
        "text": [presence(), max_length(s.max_string_length)],
    }


def default_rules_for(candidate: Any, settings: Optional[ValidationSettings] = None) -> Dict[str, List[FieldRule]]:
    """Pick the default rule set by candidate type."""
    if isinstance(candidate, Record):
        return record_rules(settings)
    if isinstance(candidate, RecordError):
        return record_error_rules(settings)
    raise TypeError(
        f"No default rules for {type(candidate).__name__}; pass rules= explicitly"
    )


# -----------------------------------------------------------------------------
# Evaluation
# -----------------------------------------------------------------------------


def _values_of(candidate: Candidate) -> Mapping[str, Any]:
    if isinstance(candidate, (Record, RecordError)):
        return candidate.field_values()
    if isinstance(candidate, BaseModel):
        return candidate.model_dump()
    return candidate


def validate(
    candidate: Candidate,
    rules: Optional[RuleSet] = None,
    identifier_lookup: Optional[IdentifierLookup] = None,
    settings: Optional[ValidationSettings] = None,
) -> ValidationResult:
    """
    Validate one candidate and return every failed rule.

    :param candidate: Record, RecordError, or a plain field -> value mapping.
    :param rules: Field -> rules mapping; defaults to the rule set for the
        candidate's type (required for plain mappings).
    :param identifier_lookup: Resolves identifier keys; when given, the
        association rule also requires the key to exist.
    :param settings: Limits used to build the default rule sets.
    :raises TypeError: If no rules were given and the candidate type has no default.
    """
    rule_set = rules if rules is not None else default_rules_for(candidate, settings)
    values = _values_of(candidate)
    context = RuleContext(values=values, identifier_lookup=identifier_lookup)
    result = ValidationResult()
    for field_name, field_rules in rule_set.items():
        value = values.get(field_name)
        for rule in field_rules:
            if not rule.passes(value, context):
                result.add(field_name, rule.name, rule.message)
    logger.debug(
        "candidate_validated",
        candidate_type=type(candidate).__name__,
        valid=result.valid,
        failure_count=len(result.failures),
    )
    return result


def is_valid(
    candidate: Candidate,
    rules: Optional[RuleSet] = None,
    identifier_lookup: Optional[IdentifierLookup] = None,
    settings: Optional[ValidationSettings] = None,
) -> bool:
    """Shorthand for ``validate(...).valid``."""
    return validate(candidate, rules, identifier_lookup, settings).valid
