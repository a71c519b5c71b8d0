"""
Record field inspection and rule tag declaration helpers.
"""

from .field_inspector import (
    RULE_TAG_KEY,
    inspect_fields,
    schema_of,
    tagged_dataclass_field,
    tagged_field,
    to_text,
)

__all__ = [
    "RULE_TAG_KEY",
    "inspect_fields",
    "schema_of",
    "tagged_field",
    "tagged_dataclass_field",
    "to_text",
]
