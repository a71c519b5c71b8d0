"""
RuleToken model: one parsed constraint from a rule tag.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RuleKind(str, Enum):
    """Closed set of rule kinds understood by the dispatcher."""

    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    REQUIRED = "required"
    EMAIL = "email"


LENGTH_KINDS = frozenset({RuleKind.MIN_LENGTH, RuleKind.MAX_LENGTH})


class RuleToken(BaseModel):
    """
    A single constraint instruction parsed from a rule tag.

    Attributes:
        kind: Which checker handles this rule
        raw: The token text exactly as it appeared in the tag
        threshold: Length bound for min/max rules, None otherwise
    """

    model_config = ConfigDict(frozen=True)

    kind: RuleKind
    raw: str = Field(..., min_length=1)
    threshold: int | None = None

    @model_validator(mode="after")
    def check_threshold_matches_kind(self) -> "RuleToken":
        """Length rules carry a threshold; keyword rules never do."""
        if self.kind in LENGTH_KINDS and self.threshold is None:
            raise ValueError(f"{self.kind.value} rule requires a threshold")
        if self.kind not in LENGTH_KINDS and self.threshold is not None:
            raise ValueError(f"{self.kind.value} rule does not take a threshold")
        return self
