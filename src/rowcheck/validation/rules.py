"""
Field rules for the validation engine.

Each rule is a named predicate over one field value with a stable failure
message. Factories below build the rules used by the default record and
record-error rule sets; they can be combined freely into custom rule sets.
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from rowcheck.models.identifier import Identifier

IdentifierLookup = Callable[[str], Optional[Identifier]]

DIGITS = "0123456789"

# local@domain.tld: labels may not start/end with '-', TLD is 2+ letters
EMAIL_PATTERN = re.compile(
    r"[A-Za-z0-9_.+\-]+@(?:[A-Za-z0-9](?:[A-Za-z0-9\-]*[A-Za-z0-9])?\.)+[A-Za-z]{2,}"
)
ALPHA_PATTERN = re.compile(r"[A-Za-z]*")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# -----------------------------------------------------------------------------
# Rule and context
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at besides its own value."""

    values: Mapping[str, Any] = field(default_factory=dict)
    identifier_lookup: Optional[IdentifierLookup] = None


@dataclass(frozen=True)
class FieldRule:
    """A named predicate; ``check`` returns True when the value passes."""

    name: str
    message: str
    check: Callable[[Any, RuleContext], bool]

    def passes(self, value: Any, context: RuleContext) -> bool:
        return bool(self.check(value, context))


def is_blank(value: Any) -> bool:
    """None, or a string that is empty or only whitespace."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _strip(value: Any, ignored: str) -> str:
    return "".join(ch for ch in _text(value) if ch not in ignored)


# -----------------------------------------------------------------------------
# Presence and numbers
# -----------------------------------------------------------------------------


def presence() -> FieldRule:
    """Fails on None and blank strings."""
    return FieldRule("presence", "can't be blank", lambda v, _ctx: not is_blank(v))


def _is_whole_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, numbers.Integral):
        return True
    if isinstance(value, numbers.Real):
        as_float = float(value)
        return math.isfinite(as_float) and as_float.is_integer()
    if isinstance(value, str):
        return INTEGER_PATTERN.fullmatch(value.strip()) is not None
    return False


def integer() -> FieldRule:
    """
    Whole numbers only.

    Accepts ints, integral floats (``3.0``) and integer strings (``"42"``,
    ``"-7"``); rejects None, booleans, fractions and anything non-numeric.
    """
    return FieldRule("integer", "must be an integer", lambda v, _ctx: _is_whole_number(v))


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


def min_length(minimum: int) -> FieldRule:
    """None counts as length 0."""
    return FieldRule(
        "min_length",
        f"is too short (minimum is {minimum} characters)",
        lambda v, _ctx: len(_text(v)) >= minimum,
    )


def max_length(maximum: int) -> FieldRule:
    return FieldRule(
        "max_length",
        f"is too long (maximum is {maximum} characters)",
        lambda v, _ctx: len(_text(v)) <= maximum,
    )


def allow_blank_when_blank(other: str, rule: FieldRule) -> FieldRule:
    """Wrap ``rule`` so it passes when both this field and ``other`` are blank."""

    def check(value: Any, ctx: RuleContext) -> bool:
        if is_blank(value) and is_blank(ctx.values.get(other)):
            return True
        return rule.passes(value, ctx)

    return FieldRule(rule.name, rule.message, check)


def requires_present(other: str) -> FieldRule:
    """Fails when this field is filled in but ``other`` is blank."""
    return FieldRule(
        f"requires_{other}",
        f"requires {other}",
        lambda v, ctx: is_blank(v) or not is_blank(ctx.values.get(other)),
    )


# -----------------------------------------------------------------------------
# Format and character sets
# -----------------------------------------------------------------------------


def matches(pattern: re.Pattern[str], name: str = "format", message: str = "is invalid") -> FieldRule:
    """The whole string must match ``pattern``; None never matches."""
    return FieldRule(
        name,
        message,
        lambda v, _ctx: isinstance(v, str) and pattern.fullmatch(v) is not None,
    )


def email_format() -> FieldRule:
    return matches(EMAIL_PATTERN)


def alpha_only() -> FieldRule:
    """ASCII letters only; blank passes (length rules cover blanks)."""
    return FieldRule(
        "alpha",
        "must only contain letters",
        lambda v, _ctx: ALPHA_PATTERN.fullmatch(_text(v)) is not None,
    )


def allowed_characters(ignored: str, name: str = "phone_characters") -> FieldRule:
    """After removing ``ignored`` punctuation only digits may remain."""
    return FieldRule(
        name,
        "contains invalid characters",
        lambda v, _ctx: all(ch in DIGITS for ch in _strip(v, ignored)),
    )


def digit_count(count: int, ignored: str, name: str = "phone_digits") -> FieldRule:
    """After removing ``ignored`` punctuation exactly ``count`` digits must remain."""
    return FieldRule(
        name,
        f"must contain exactly {count} digits",
        lambda v, _ctx: sum(1 for ch in _strip(v, ignored) if ch in DIGITS) == count,
    )


# -----------------------------------------------------------------------------
# Association
# -----------------------------------------------------------------------------


def identifier_key(value: Any) -> Optional[str]:
    if isinstance(value, Identifier):
        return value.key
    if is_blank(value):
        return None
    return _text(value)


def association() -> FieldRule:
    """
    The referenced Identifier must exist.

    Without a lookup in the context a non-blank key is enough; with one, the
    key must also resolve.
    """

    def check(value: Any, ctx: RuleContext) -> bool:
        key = identifier_key(value)
        if key is None:
            return False
        if ctx.identifier_lookup is None:
            return True
        return ctx.identifier_lookup(key) is not None

    return FieldRule("association", "must exist", check)
