"""
Base validator interface for all rule checkers.

All validators must inherit from BaseValidator and implement the validate() method.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..errors import RuleViolation
from ..models import RuleKind


class BaseValidator(ABC):
    """
    Abstract base class for all validators.

    Each validator implements a specific rule kind
    (min_length, max_length, required, email) against a text value.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        """
        Initialize validator.

        Args:
            field_name: Name of the field to validate (used in messages only)
            parameters: Rule-specific parameters (e.g., threshold for lengths)
        """
        self.field_name = field_name
        self.parameters = parameters or {}

    @abstractmethod
    def validate(self, value: str) -> None:
        """
        Validate a value against this rule.

        Args:
            value: The field value, as text

        Raises:
            RuleViolation: If validation fails
        """
        pass

    @property
    @abstractmethod
    def rule_kind(self) -> RuleKind:
        """Return the rule kind handled by this validator."""
        pass

    def fail(self, message: str) -> RuleViolation:
        """Build the violation raised by this validator."""
        return RuleViolation(
            rule_kind=self.rule_kind,
            field_name=self.field_name,
            message=message,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.field_name}, params={self.parameters})"
