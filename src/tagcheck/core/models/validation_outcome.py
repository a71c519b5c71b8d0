"""
ValidationOutcome model representing the result of validating one record (ephemeral).
"""

from pydantic import BaseModel, ConfigDict, model_validator

from .rule_token import RuleKind


class ValidationOutcome(BaseModel):
    """
    Outcome of validating a record: either valid, or the first violation found.

    Attributes:
        valid: Overall validation status
        field_name: Field that failed (None when valid)
        rule_kind: Rule that failed (None when valid)
        message: Human-readable error message (None when valid)
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "valid": False,
                "field_name": "Name",
                "rule_kind": "min_length",
                "message": "Name must be at least 2 characters long",
            }
        },
    )

    valid: bool
    field_name: str | None = None
    rule_kind: RuleKind | None = None
    message: str | None = None

    @model_validator(mode="after")
    def check_valid_consistency(self) -> "ValidationOutcome":
        """Validate that valid=True carries no violation and valid=False carries one."""
        details = (self.field_name, self.rule_kind, self.message)
        if self.valid and any(d is not None for d in details):
            raise ValueError("valid=True but violation details are set")
        if not self.valid and any(d is None for d in details):
            raise ValueError("valid=False requires field_name, rule_kind and message")
        return self

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def invalid(cls, field_name: str, rule_kind: RuleKind, message: str) -> "ValidationOutcome":
        return cls(valid=False, field_name=field_name, rule_kind=rule_kind, message=message)

    def __bool__(self) -> bool:
        return self.valid

