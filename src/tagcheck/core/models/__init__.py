"""
Core data models for the field validation engine.

All models use Pydantic for runtime validation and type safety.
"""

from .field_descriptor import FieldDescriptor
from .record_schema import RecordSchema
from .rule_token import LENGTH_KINDS, RuleKind, RuleToken
from .validation_outcome import ValidationOutcome

__all__ = [
    "FieldDescriptor",
    "RecordSchema",
    "RuleKind",
    "RuleToken",
    "LENGTH_KINDS",
    "ValidationOutcome",
]
