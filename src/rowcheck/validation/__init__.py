"""
rowcheck Validation Module

Declarative field rules, the engine that runs them, and the result model
that reports every failure per field.
"""

from rowcheck.validation.engine import (
    default_rules_for,
    is_valid,
    record_error_rules,
    record_rules,
    validate,
)
from rowcheck.validation.result import RuleFailure, ValidationResult
from rowcheck.validation.rules import (
    EMAIL_PATTERN,
    FieldRule,
    IdentifierLookup,
    RuleContext,
    allow_blank_when_blank,
    allowed_characters,
    alpha_only,
    association,
    digit_count,
    email_format,
    identifier_key,
    integer,
    is_blank,
    matches,
    max_length,
    min_length,
    presence,
    requires_present,
)

__all__ = [
    "EMAIL_PATTERN",
    "FieldRule",
    "IdentifierLookup",
    "RuleContext",
    "RuleFailure",
    "ValidationResult",
    "allow_blank_when_blank",
    "allowed_characters",
    "alpha_only",
    "association",
    "default_rules_for",
    "digit_count",
    "email_format",
    "identifier_key",
    "integer",
    "is_blank",
    "is_valid",
    "matches",
    "max_length",
    "min_length",
    "presence",
    "record_error_rules",
    "record_rules",
    "requires_present",
    "validate",
]
