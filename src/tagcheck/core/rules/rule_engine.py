"""
Rule engine for validating tagged records.

The rule engine walks a record's fields in declaration order, parses each
field's rule tag, dispatches every rule to its validator and stops at the
first violation.
"""

from typing import Any, Iterable

from tagcheck.core.inspection import inspect_fields, schema_of
from tagcheck.core.models import RecordSchema, ValidationOutcome
from tagcheck.core.rules.dispatcher import apply_rules
from tagcheck.core.rules.rule_config import EngineConfig
from tagcheck.core.rules.tokenizer import ignored_tokens, parse_tag
from tagcheck.observability.logger import get_logger

logger = get_logger(__name__)


class RuleEngine:
    """
    Validates records against the rule tags declared on their fields.

    First failure wins: validation stops at the first failing rule of the
    first failing field and reports only that one.
    """

    def __init__(self, config: EngineConfig | None = None):
        """
        Initialize the rule engine.

        Args:
            config: Engine settings (read from the environment when omitted)
        """
        self.config = config if config is not None else EngineConfig.from_env()

    def validate(self, record: Any, schema: RecordSchema | None = None) -> ValidationOutcome:
        """
        Validate a record.

        Args:
            record: A pydantic model instance, dataclass instance, or mapping
            schema: Explicit rule table; required when record is a mapping

        Returns:
            ValidationOutcome, valid or carrying the first violation

        Raises:
            InvalidInputError: If record is not a structured record
            RuleSyntaxError: In strict mode, if a rule tag cannot be parsed
        """
        for descriptor in inspect_fields(record, schema):
            if not descriptor.rule_tag:
                continue

            rules = parse_tag(descriptor.rule_tag, self.config.strict)
            logger.debug(
                f"Checking {descriptor.name} against {len(rules)} rule(s)",
                extra={"field_name": descriptor.name, "rule_tag": descriptor.rule_tag},
            )

            violation = apply_rules(rules, descriptor)
            if violation is not None:
                logger.debug(
                    f"Validation failed: {violation.message}",
                    extra={
                        "field_name": violation.field_name,
                        "rule_kind": violation.rule_kind.value,
                    },
                )
                return ValidationOutcome.invalid(
                    field_name=violation.field_name,
                    rule_kind=violation.rule_kind,
                    message=violation.message,
                )

        return ValidationOutcome.ok()

    def validate_batch(
        self, records: Iterable[Any], schema: RecordSchema | None = None
    ) -> list[ValidationOutcome]:
        """
        Validate a batch of records.

        Args:
            records: Records of the same shape
            schema: Explicit rule table shared by every record

        Returns:
            List of ValidationOutcome objects, one per record
        """
        return [self.validate(record, schema) for record in records]

    def get_rule_summary(self, target: Any) -> dict[str, Any]:
        """
        Get summary of the rules declared for a record, record type, or schema.

        Returns:
            Dictionary with rule counts by kind and by field, and ignored tokens
        """
        schema = self._resolve_schema(target)

        by_kind: dict[str, int] = {}
        by_field: dict[str, int] = {}
        ignored: list[str] = []
        for field_name, tag in schema.fields.items():
            rules = parse_tag(tag, self.config.strict)
            by_field[field_name] = len(rules)
            for rule in rules:
                by_kind[rule.kind.value] = by_kind.get(rule.kind.value, 0) + 1
            ignored.extend(ignored_tokens(tag))

        return {
            "schema": schema.name,
            "total_rules": sum(by_field.values()),
            "rules_by_kind": by_kind,
            "rules_by_field": by_field,
            "ignored_tokens": ignored,
        }

    @staticmethod
    def _resolve_schema(target: Any) -> RecordSchema:
        if isinstance(target, RecordSchema):
            return target
        if isinstance(target, type):
            return schema_of(target)
        return schema_of(type(target))


def validate(record: Any, schema: RecordSchema | None = None, *, strict: bool = False) -> ValidationOutcome:
    """
    Validate a record.

    Strict mode is on when strict=True or TAGCHECK_STRICT is set.

    Usage:
        outcome = validate(user)
        if not outcome.valid:
            print(f"Validation error: {outcome.message}")
    """
    engine = RuleEngine(EngineConfig(strict=True)) if strict else RuleEngine()
    return engine.validate(record, schema)
