"""
Rule configuration management.

Loads record schemas from YAML files and provides utilities
for building schemas and engine settings programmatically.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from tagcheck.core.errors import RuleConfigError
from tagcheck.core.models import RecordSchema
from tagcheck.core.rules.tokenizer import parse_tag

TRUTHY = ("1", "true", "yes", "on")


class EngineConfig(BaseModel):
    """
    Settings for the rule engine.

    Attributes:
        strict: Reject unknown rule tokens and malformed thresholds
                instead of ignoring them
    """

    model_config = ConfigDict(frozen=True)

    strict: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build settings from TAGCHECK_STRICT."""
        return cls(strict=os.getenv("TAGCHECK_STRICT", "").strip().lower() in TRUTHY)


class RuleConfigLoader:
    """
    Loads record schemas from YAML configuration files.

    Expected YAML format:
    ```yaml
    strict: false
    schemas:
      User:
        Name: "min=2,max=32"
        Email: "required,email"
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")
        self._config: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._config is None:
            try:
                with open(self.config_path) as f:
                    config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise RuleConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

            if not isinstance(config, dict) or "schemas" not in config:
                raise RuleConfigError("Configuration file must contain 'schemas' section")
            self._config = config
        return self._config

    def load_engine_config(self) -> EngineConfig:
        """
        Read engine settings from the file.

        Raises:
            RuleConfigError: If the settings are invalid
        """
        config = self._load()
        try:
            return EngineConfig(strict=config.get("strict", False))
        except ValidationError as e:
            raise RuleConfigError(f"Invalid engine settings: {e}") from e

    def load_schemas(self) -> dict[str, RecordSchema]:
        """
        Load and parse record schemas from the YAML file.

        Every tag is parsed once here so a strict-mode syntax error is reported
        at load time rather than during validation.

        Returns:
            Schema name to RecordSchema, in file order

        Raises:
            RuleConfigError: If YAML is invalid or a schema is malformed
            RuleSyntaxError: In strict mode, if a rule tag cannot be parsed
        """
        config = self._load()
        strict = self.load_engine_config().strict

        schema_defs = config["schemas"]
        if not isinstance(schema_defs, dict):
            raise RuleConfigError("'schemas' must be a mapping of schema name to fields")

        schemas = {}
        for schema_name, field_defs in schema_defs.items():
            schema = self._parse_schema(str(schema_name), field_defs)
            for tag in schema.fields.values():
                parse_tag(tag, strict)
            schemas[schema.name] = schema

        return schemas

    def load_schema(self, name: str) -> RecordSchema:
        """
        Load a single schema by name.

        Raises:
            RuleConfigError: If no schema with that name exists
        """
        schemas = self.load_schemas()
        if name not in schemas:
            available = ", ".join(schemas) or "none"
            raise RuleConfigError(f"Unknown schema '{name}' (available: {available})")
        return schemas[name]

    def _parse_schema(self, schema_name: str, field_defs: Any) -> RecordSchema:
        """
        Parse a single schema definition.

        A field may map to a tag string, or to null for a field with no rules.
        """
        if not isinstance(field_defs, dict):
            raise RuleConfigError(f"Fields for schema '{schema_name}' must be a mapping")

        fields = {}
        for field_name, tag in field_defs.items():
            if tag is None:
                tag = ""
            if not isinstance(tag, str):
                raise RuleConfigError(
                    f"Rule tag for '{schema_name}.{field_name}' must be a string, "
                    f"got {type(tag).__name__}"
                )
            fields[str(field_name)] = tag

        return RecordSchema(name=schema_name, fields=fields)


class RecordSchemaBuilder:
    """
    Programmatically build record schemas (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty field table."""
        self.fields: dict[str, str] = {}

    def field(self, field_name: str, tag: str = "") -> "RecordSchemaBuilder":
        """Add a field with a raw rule tag."""
        self.fields[field_name] = tag
        return self

    def build(self, name: str) -> RecordSchema:
        """Build and return the schema."""
        return RecordSchema(name=name, fields=dict(self.fields))
