"""
RecordSchema model: explicit, ordered field-name to rule-tag table.

Used for records that carry no field metadata of their own, such as plain
dictionaries loaded from JSON or YAML.
"""

from pydantic import BaseModel, ConfigDict, Field


class RecordSchema(BaseModel):
    """
    Named set of per-field rule tags.

    Attributes:
        name: Schema name ("User")
        fields: Field name to rule tag, in declaration order
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "name": "User",
                "fields": {
                    "Name": "min=2,max=32",
                    "Email": "required,email",
                },
            }
        },
    )

    name: str = Field(..., min_length=1)
    fields: dict[str, str] = Field(default_factory=dict)

    def rule_tag(self, field_name: str) -> str:
        """Return the rule tag for a field, or an empty string if none is declared."""
        return self.fields.get(field_name, "")
