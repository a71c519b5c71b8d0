"""
RequiredFieldValidator - ensures a field value is not empty.
"""

from ..models import RuleKind
from .base_validator import BaseValidator


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field has a non-empty value.

    Whitespace is not trimmed: a value made only of spaces counts as present.
    Missing and None values reach the validator as the empty string.
    """

    def validate(self, value: str) -> None:
        """
        Validate that the value is not the empty string.

        Args:
            value: The field value, as text

        Raises:
            RuleViolation: If the value is empty
        """
        if value == "":
            raise self.fail(f"{self.field_name} is required")

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.REQUIRED
