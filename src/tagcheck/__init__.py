"""
tagcheck - declarative field validation driven by rule tags.

Usage:
    from pydantic import BaseModel
    from tagcheck import tagged_field, validate

    class User(BaseModel):
        Name: str = tagged_field("min=2,max=32")
        Email: str = tagged_field("required,email")

    outcome = validate(User(Name="A", Email="aliceexample.com"))
    # outcome.message == "Name must be at least 2 characters long"
"""

from tagcheck.core.errors import (
    InvalidInputError,
    RuleConfigError,
    RuleSyntaxError,
    RuleViolation,
    TagCheckError,
)
from tagcheck.core.inspection import inspect_fields, tagged_dataclass_field, tagged_field
from tagcheck.core.models import FieldDescriptor, RecordSchema, RuleKind, RuleToken, ValidationOutcome
from tagcheck.core.rules import (
    EngineConfig,
    RecordSchemaBuilder,
    RuleConfigLoader,
    RuleEngine,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "validate",
    "RuleEngine",
    "EngineConfig",
    "RuleConfigLoader",
    "RecordSchemaBuilder",
    "RecordSchema",
    "FieldDescriptor",
    "RuleKind",
    "RuleToken",
    "ValidationOutcome",
    "inspect_fields",
    "tagged_field",
    "tagged_dataclass_field",
    "TagCheckError",
    "InvalidInputError",
    "RuleViolation",
    "RuleSyntaxError",
    "RuleConfigError",
]
