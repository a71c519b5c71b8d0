"""
MinLengthValidator and MaxLengthValidator - bound the length of a text value.
"""

from typing import Any

from ..models import RuleKind
from .base_validator import BaseValidator


class _LengthValidator(BaseValidator):
    """
    Shared setup for length bounds.

    Parameters:
    - threshold: Length bound in characters
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None):
        super().__init__(field_name, parameters)

        threshold = self.parameters.get("threshold")
        if threshold is None:
            raise ValueError(f"{self.__class__.__name__} requires 'threshold' parameter")
        if not isinstance(threshold, int) or isinstance(threshold, bool):
            raise ValueError(f"threshold must be an integer, got {type(threshold).__name__}")

        self.threshold: int = threshold


class MinLengthValidator(_LengthValidator):
    """Fails when the value is shorter than the threshold."""

    def validate(self, value: str) -> None:
        if len(value) < self.threshold:
            raise self.fail(
                f"{self.field_name} must be at least {self.threshold} characters long"
            )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.MIN_LENGTH


class MaxLengthValidator(_LengthValidator):
    """Fails when the value is longer than the threshold."""

    def validate(self, value: str) -> None:
        if len(value) > self.threshold:
            raise self.fail(
                f"{self.field_name} must be at most {self.threshold} characters long"
            )

    @property
    def rule_kind(self) -> RuleKind:
        return RuleKind.MAX_LENGTH
