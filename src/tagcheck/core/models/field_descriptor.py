"""
FieldDescriptor model: ephemeral view of one record field during validation.
"""

from pydantic import BaseModel, ConfigDict


class FieldDescriptor(BaseModel):
    """
    Name, text value and raw rule tag of a single field.

    Created by the field inspector and discarded once the field's rules
    have been evaluated.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    value: str = ""
    rule_tag: str = ""
