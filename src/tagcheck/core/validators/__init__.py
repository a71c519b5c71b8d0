"""
Rule checker implementations.

Provides validators for minimum and maximum length, required fields,
and email address format.
"""

from ..errors import RuleViolation
from .base_validator import BaseValidator
from .email_validator import EMAIL_PATTERN, EmailValidator
from .length_validator import MaxLengthValidator, MinLengthValidator
from .required_field_validator import RequiredFieldValidator

__all__ = [
    "BaseValidator",
    "RuleViolation",
    "MinLengthValidator",
    "MaxLengthValidator",
    "RequiredFieldValidator",
    "EmailValidator",
    "EMAIL_PATTERN",
]
