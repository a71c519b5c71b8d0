"""
Field inspection for tagged records.

Walks the fields of a record in declaration order and yields a
FieldDescriptor per field. Three record shapes are supported:

- pydantic models whose fields carry ``json_schema_extra={"validate": tag}``
- dataclasses whose fields carry ``metadata={"validate": tag}``
- plain mappings, validated against an explicit RecordSchema
"""

import dataclasses
from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field

from tagcheck.core.errors import InvalidInputError
from tagcheck.core.models import FieldDescriptor, RecordSchema

RULE_TAG_KEY = "validate"


def tagged_field(tag: str, default: Any = ..., **kwargs: Any) -> Any:
    """
    Declare a pydantic field carrying a rule tag.

    Usage:
        class User(BaseModel):
            Name: str = tagged_field("min=2,max=32")
    """
    return Field(default, json_schema_extra={RULE_TAG_KEY: tag}, **kwargs)


def tagged_dataclass_field(tag: str, **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a rule tag."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[RULE_TAG_KEY] = tag
    return dataclasses.field(metadata=metadata, **kwargs)


def to_text(value: Any) -> str:
    """Render a field value as the text the validators see."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def _pydantic_tag(field_info: Any) -> str:
    extra = field_info.json_schema_extra
    if isinstance(extra, dict):
        tag = extra.get(RULE_TAG_KEY)
        return tag if isinstance(tag, str) else ""
    return ""


def _inspect_model(record: BaseModel) -> Iterator[FieldDescriptor]:
    for name, field_info in type(record).model_fields.items():
        yield FieldDescriptor(
            name=name,
            value=to_text(getattr(record, name)),
            rule_tag=_pydantic_tag(field_info),
        )


def _dataclass_tag(field: dataclasses.Field) -> str:
    tag = field.metadata.get(RULE_TAG_KEY, "")
    return tag if isinstance(tag, str) else ""


def _inspect_dataclass(record: Any) -> Iterator[FieldDescriptor]:
    for field in dataclasses.fields(record):
        yield FieldDescriptor(
            name=field.name,
            value=to_text(getattr(record, field.name)),
            rule_tag=_dataclass_tag(field),
        )


def _inspect_mapping(record: Mapping, schema: RecordSchema) -> Iterator[FieldDescriptor]:
    for name, tag in schema.fields.items():
        yield FieldDescriptor(name=name, value=to_text(record.get(name)), rule_tag=tag)


def inspect_fields(record: Any, schema: RecordSchema | None = None) -> Iterator[FieldDescriptor]:
    """
    Produce a FieldDescriptor for each field of a record, lazily and in order.

    When a schema is given its rule tags are used, whatever the record shape;
    schema fields missing from the record read as the empty string.

    Args:
        record: A pydantic model instance, dataclass instance, or mapping
        schema: Explicit rule table (required for mappings)

    Returns:
        Iterator of FieldDescriptor in declaration order

    Raises:
        InvalidInputError: If the record is not a structured record
    """
    # Checked eagerly so the error surfaces at the call, not on first next()
    if isinstance(record, type):
        raise InvalidInputError(record, "expected a record instance, got a class")

    if schema is not None:
        if isinstance(record, Mapping):
            return _inspect_mapping(record, schema)
        if isinstance(record, BaseModel) or dataclasses.is_dataclass(record):
            values = {name: getattr(record, name, None) for name in schema.fields}
            return _inspect_mapping(values, schema)
        raise InvalidInputError(record)

    if isinstance(record, BaseModel):
        return _inspect_model(record)
    if dataclasses.is_dataclass(record):
        return _inspect_dataclass(record)
    if isinstance(record, Mapping):
        raise InvalidInputError(record, "mappings must be validated against a RecordSchema")
    raise InvalidInputError(record)


def schema_of(record_type: type) -> RecordSchema:
    """
    Build a RecordSchema from the rule tags declared on a model or dataclass type.

    Raises:
        InvalidInputError: If the type declares no inspectable fields
    """
    if isinstance(record_type, type) and issubclass(record_type, BaseModel):
        fields = {
            name: _pydantic_tag(info) for name, info in record_type.model_fields.items()
        }
    elif isinstance(record_type, type) and dataclasses.is_dataclass(record_type):
        fields = {
            f.name: _dataclass_tag(f) for f in dataclasses.fields(record_type)
        }
    else:
        raise InvalidInputError(record_type, "expected a pydantic model or dataclass type")
    return RecordSchema(name=record_type.__name__, fields=fields)
