"""
Unit tests for the rule engine, dispatcher and rule configuration.
"""

import logging
from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import BaseModel

from tagcheck import validate
from tagcheck.core.errors import InvalidInputError, RuleConfigError, RuleSyntaxError, RuleViolation
from tagcheck.core.inspection import tagged_dataclass_field, tagged_field
from tagcheck.core.models import FieldDescriptor, RecordSchema, RuleKind, RuleToken
from tagcheck.core.rules import (
    VALIDATOR_REGISTRY,
    EngineConfig,
    RecordSchemaBuilder,
    RuleConfigLoader,
    RuleEngine,
    apply_rules,
    build_validator,
    dispatch,
    parse_tag,
)
from tagcheck.core.rules import rule_engine
from tagcheck.core.validators import MinLengthValidator


class User(BaseModel):
    Name: str = tagged_field("min=2,max=32")
    Email: str = tagged_field("required,email")


class Plain(BaseModel):
    Name: str = ""
    Email: str = ""


class Named(BaseModel):
    Name: str = tagged_field("min=2,max=32")


class Ordered(BaseModel):
    Value: str = tagged_field("min=5,email")


class Reordered(BaseModel):
    Value: str = tagged_field("email,min=5")


class Sloppy(BaseModel):
    Name: str = tagged_field("min=2, max=3")


class Misconfigured(BaseModel):
    Short: str = tagged_field("min=abc")
    Long: str = tagged_field("max=abc")


@dataclass
class DataclassUser:
    Name: str = tagged_dataclass_field("min=2,max=32")
    Email: str = tagged_dataclass_field("required,email")


class TestDispatcher:
    """Tests for dispatch() and apply_rules()"""

    def test_registry_covers_every_rule_kind(self):
        assert set(VALIDATOR_REGISTRY) == set(RuleKind)

    def test_build_validator_passes_threshold(self):
        validator = build_validator(RuleToken(kind=RuleKind.MIN_LENGTH, raw="min=2", threshold=2), "Name")

        assert isinstance(validator, MinLengthValidator)
        assert validator.threshold == 2
        assert validator.field_name == "Name"

    def test_dispatch_raises_violation(self):
        rule = RuleToken(kind=RuleKind.REQUIRED, raw="required")

        with pytest.raises(RuleViolation):
            dispatch(rule, FieldDescriptor(name="Email", value=""))

    def test_apply_rules_returns_first_violation(self):
        descriptor = FieldDescriptor(name="Value", value="a@b", rule_tag="min=5,email")
        violation = apply_rules(parse_tag(descriptor.rule_tag), descriptor)

        assert violation.rule_kind is RuleKind.MIN_LENGTH

    def test_apply_rules_all_pass(self):
        descriptor = FieldDescriptor(name="Email", value="alice@example.com")
        assert apply_rules(parse_tag("required,email"), descriptor) is None


class TestRuleEngine:
    """Tests for RuleEngine.validate()"""

    def test_valid_sample_user(self):
        outcome = validate(User(Name="Alice", Email="alice@example.com"))

        assert outcome.valid is True
        assert outcome.message is None
        assert bool(outcome) is True

    def test_invalid_sample_user_reports_name_first(self):
        outcome = validate(User(Name="A", Email="aliceexample.com"))

        assert outcome.valid is False
        assert outcome.field_name == "Name"
        assert outcome.rule_kind is RuleKind.MIN_LENGTH
        assert outcome.message == "Name must be at least 2 characters long"

    def test_email_checked_after_name_passes(self):
        outcome = validate(User(Name="Alice", Email="aliceexample.com"))
        assert outcome.message == "Email must be a valid email address"

    def test_required_before_email(self):
        outcome = validate(User(Name="Alice", Email=""))
        assert outcome.message == "Email is required"

    def test_dataclass_records(self):
        assert validate(DataclassUser(Name="Alice", Email="alice@example.com")).valid
        outcome = validate(DataclassUser(Name="Alice" * 7, Email="alice@example.com"))
        assert outcome.message == "Name must be at most 32 characters long"

    def test_mapping_records_with_schema(self, user_schema):
        assert validate({"Name": "Alice", "Email": "alice@example.com"}, user_schema).valid
        outcome = validate({"Name": "Alice"}, user_schema)
        assert outcome.message == "Email is required"

    def test_invalid_input_raises(self):
        with pytest.raises(InvalidInputError):
            validate("not a record")

    def test_rule_order_decides_reported_error(self):
        """Test the earliest token in the tag wins when several rules fail"""
        assert validate(Ordered(Value="a@b")).rule_kind is RuleKind.MIN_LENGTH
        assert validate(Reordered(Value="a@b")).rule_kind is RuleKind.EMAIL

    def test_space_after_comma_ignores_rule(self):
        """Test ' max=3' is an unknown token and never enforced"""
        assert validate(Sloppy(Name="Alexander")).valid is True

    def test_malformed_thresholds_permissive(self):
        """Test bad min threshold always passes and bad max fails non-empty values"""
        assert validate(Misconfigured(Short="", Long="")).valid is True
        outcome = validate(Misconfigured(Short="", Long="x"))
        assert outcome.message == "Long must be at most 0 characters long"

    def test_malformed_thresholds_strict(self):
        with pytest.raises(RuleSyntaxError) as exc_info:
            validate(Misconfigured(Short="", Long=""), strict=True)

        assert exc_info.value.token == "min=abc"

    def test_strict_rejects_space_after_comma(self):
        with pytest.raises(RuleSyntaxError):
            RuleEngine(EngineConfig(strict=True)).validate(Sloppy(Name="Al"))

    def test_untagged_fields_skipped_in_strict_mode(self):
        assert validate(Plain(Name="", Email="nope"), strict=True).valid

    def test_env_enables_strict_mode(self, monkeypatch):
        """Test TAGCHECK_STRICT turns strict parsing on for validate()"""
        monkeypatch.setenv("TAGCHECK_STRICT", "1")

        with pytest.raises(RuleSyntaxError):
            validate(Sloppy(Name="Al"))

    def test_env_read_at_call_time(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_STRICT", "0")
        assert validate(Sloppy(Name="Al")).valid

        monkeypatch.setenv("TAGCHECK_STRICT", "true")
        with pytest.raises(RuleSyntaxError):
            validate(Sloppy(Name="Al"))

    def test_engine_without_config_reads_env(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_STRICT", "yes")
        assert RuleEngine().config.strict is True

    def test_explicit_config_overrides_env(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_STRICT", "1")
        assert RuleEngine(EngineConfig()).validate(Sloppy(Name="Al")).valid

    def test_violation_logged_at_debug(self):
        """Test violations are logged at DEBUG with field and rule details"""
        records = []

        class Collect(logging.Handler):
            def emit(self, record):
                records.append(record)

        engine_logger = logging.getLogger(rule_engine.__name__)
        handler = Collect(level=logging.DEBUG)
        previous_level = engine_logger.level
        engine_logger.addHandler(handler)
        engine_logger.setLevel(logging.DEBUG)
        try:
            validate(User(Name="A", Email="alice@example.com"))
        finally:
            engine_logger.removeHandler(handler)
            engine_logger.setLevel(previous_level)

        failures = [r for r in records if r.getMessage().startswith("Validation failed")]
        assert len(failures) == 1
        assert failures[0].levelno == logging.DEBUG
        assert failures[0].field_name == "Name"
        assert failures[0].rule_kind == "min_length"

    @given(st.text(max_size=40), st.text(max_size=40))
    def test_property_untagged_records_always_valid(self, name, email):
        assert validate(Plain(Name=name, Email=email)).valid

    @given(st.text(max_size=50))
    def test_property_min_max_mutually_exclusive(self, value):
        outcome = validate(Named(Name=value))

        if len(value) < 2:
            assert outcome.message == "Name must be at least 2 characters long"
        elif len(value) > 32:
            assert outcome.message == "Name must be at most 32 characters long"
        else:
            assert outcome.valid

    @given(st.text(min_size=1))
    def test_property_required_passes_non_empty(self, value):
        schema = RecordSchema(name="R", fields={"Field": "required"})
        assert validate({"Field": value}, schema).valid


class TestBatchAndSummary:
    """Tests for validate_batch() and get_rule_summary()"""

    def test_validate_batch(self, user_schema):
        records = [
            {"Name": "Alice", "Email": "alice@example.com"},
            {"Name": "A", "Email": "alice@example.com"},
            {"Name": "Bob", "Email": "BOB@EXAMPLE.COM"},
        ]

        outcomes = RuleEngine().validate_batch(records, user_schema)

        assert [o.valid for o in outcomes] == [True, False, False]
        assert outcomes[2].rule_kind is RuleKind.EMAIL

    def test_rule_summary_for_model(self):
        summary = RuleEngine().get_rule_summary(User)

        assert summary["schema"] == "User"
        assert summary["total_rules"] == 4
        assert summary["rules_by_kind"] == {"min_length": 1, "max_length": 1, "required": 1, "email": 1}
        assert summary["rules_by_field"] == {"Name": 2, "Email": 2}
        assert summary["ignored_tokens"] == []

    def test_rule_summary_for_instance_and_schema(self):
        engine = RuleEngine()
        by_instance = engine.get_rule_summary(User(Name="Al", Email="a@b.io"))
        schema = RecordSchemaBuilder().field("Name", "min=2, max=3").build("Sloppy")

        assert by_instance["total_rules"] == 4
        assert engine.get_rule_summary(schema)["ignored_tokens"] == [" max=3"]


class TestEngineConfig:
    """Tests for EngineConfig"""

    def test_default_is_permissive(self):
        assert EngineConfig().strict is False

    @pytest.mark.parametrize("raw,expected", [
        ("1", True), ("true", True), ("YES", True), ("0", False), ("", False), ("off", False),
    ])
    def test_from_env(self, monkeypatch, raw, expected):
        monkeypatch.setenv("TAGCHECK_STRICT", raw)
        assert EngineConfig.from_env().strict is expected

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv("TAGCHECK_STRICT", raising=False)
        assert EngineConfig.from_env().strict is False


class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_load_schemas_from_yaml(self, rules_file):
        schemas = RuleConfigLoader(rules_file).load_schemas()

        assert list(schemas) == ["User", "Contact"]
        assert schemas["User"].fields == {"Name": "min=2,max=32", "Email": "required,email"}
        assert schemas["Contact"].rule_tag("Notes") == ""

    def test_load_schema_by_name(self, rules_file):
        schema = RuleConfigLoader(rules_file).load_schema("User")
        assert validate({"Name": "A", "Email": "a@b.io"}, schema).field_name == "Name"

    def test_unknown_schema_raises(self, rules_file):
        with pytest.raises(RuleConfigError) as exc_info:
            RuleConfigLoader(rules_file).load_schema("Order")

        assert "User, Contact" in str(exc_info.value)

    def test_engine_config_from_file(self, write_file):
        path = write_file("strict.yaml", "strict: true\nschemas:\n  A:\n    x: required\n")
        assert RuleConfigLoader(path).load_engine_config().strict is True

    def test_strict_file_rejects_bad_tags_at_load(self, write_file):
        path = write_file("strict.yaml", "strict: true\nschemas:\n  A:\n    x: 'required,unique'\n")

        with pytest.raises(RuleSyntaxError):
            RuleConfigLoader(path).load_schemas()

    def test_load_rules_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader("/nonexistent/path/rules.yaml")

    def test_load_rules_invalid_yaml(self, write_file):
        path = write_file("bad.yaml", "schemas: [unclosed\n")

        with pytest.raises(RuleConfigError):
            RuleConfigLoader(path).load_schemas()

    def test_missing_schemas_section(self, write_file):
        path = write_file("empty.yaml", "strict: false\n")

        with pytest.raises(RuleConfigError) as exc_info:
            RuleConfigLoader(path).load_schemas()

        assert "schemas" in str(exc_info.value)

    def test_non_string_tag_rejected(self, write_file):
        path = write_file("num.yaml", "schemas:\n  A:\n    x: 5\n")

        with pytest.raises(RuleConfigError) as exc_info:
            RuleConfigLoader(path).load_schemas()

        assert "A.x" in str(exc_info.value)

    def test_invalid_strict_value(self, write_file):
        path = write_file("flag.yaml", "strict: maybe\nschemas: {}\n")

        with pytest.raises(RuleConfigError):
            RuleConfigLoader(path).load_engine_config()
