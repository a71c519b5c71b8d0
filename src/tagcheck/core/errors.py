"""
Exception hierarchy for tagcheck.

RuleViolation is the only exception the checkers raise; the rule engine
converts it into a ValidationOutcome so it never escapes validate().
"""

from .models.rule_token import RuleKind


class TagCheckError(Exception):
    """Base class for all tagcheck errors."""


class InvalidInputError(TagCheckError, TypeError):
    """Raised when the value handed to validate() is not a structured record."""

    def __init__(self, value: object, reason: str | None = None):
        self.value_type = type(value).__name__
        self.reason = reason or "expected a pydantic model, dataclass, or mapping with a schema"
        super().__init__(f"Cannot validate {self.value_type}: {self.reason}")


class RuleViolation(TagCheckError):
    """Raised when a field value fails a rule."""

    def __init__(self, rule_kind: RuleKind, field_name: str, message: str):
        self.rule_kind = rule_kind
        self.field_name = field_name
        self.message = message
        super().__init__(message)


class RuleSyntaxError(TagCheckError, ValueError):
    """Raised in strict mode when a rule token cannot be parsed."""

    def __init__(self, token: str, reason: str):
        self.token = token
        self.reason = reason
        super().__init__(f"Invalid rule token {token!r}: {reason}")


class RuleConfigError(TagCheckError, ValueError):
    """Raised when a YAML rule configuration is malformed."""
