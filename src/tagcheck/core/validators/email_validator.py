"""
EmailValidator - validates field values against the email address pattern.
"""

import re
from re import Pattern

from ..models import RuleKind
from .base_validator import BaseValidator

# Lowercase only; uppercase addresses are rejected.
EMAIL_PATTERN: Pattern = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,4}$")


class EmailValidator(BaseValidator):
    """
    Validates that a field value is a lowercase email address.

    The pattern is compiled once at import time and shared by every instance.
    """

    pattern: Pattern = EMAIL_PATTERN

    def validate(self, value: str) -> None:
        """
        Validate that the value matches the email pattern.

        Args:
            value: The field value, as text

        Raises:
            RuleViolation: If value doesn't match the pattern
        """
        # A trailing newline must not match
        if not self.pattern.fullmatch(value):
            raise self.fail(f"{self.field_name} must be a valid email address")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.EMAIL
