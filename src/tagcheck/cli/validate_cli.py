"""
Command-line interface for validating tagged records.

Usage:
    python -m tagcheck.cli.validate_cli demo
    python -m tagcheck.cli.validate_cli check --rules <rules.yaml> --schema <name> --input <records> [--strict]
    python -m tagcheck.cli.validate_cli rules --rules <rules.yaml>
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from tagcheck.core.errors import InvalidInputError, RuleConfigError, RuleSyntaxError
from tagcheck.core.inspection import tagged_field
from tagcheck.core.rules import EngineConfig, RuleConfigLoader, RuleEngine
from tagcheck.observability.logger import get_logger, log_operation

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2


class User(BaseModel):
    """Sample record used by the demo command."""

    Name: str = tagged_field("min=2,max=32")
    Email: str = tagged_field("required,email")


def format_outcome(outcome) -> str:
    """Render an outcome the way the console reports it."""
    if outcome.valid:
        return "User is valid"
    return f"Validation error: {outcome.message}"


def demo_command(args) -> int:
    """
    Validate the two sample users and print the result for each.

    Args:
        args: Command line arguments
    """
    engine = RuleEngine()
    users = [
        User(Name="Alice", Email="alice@example.com"),
        User(Name="A", Email="aliceexample.com"),
    ]
    for user in users:
        print(format_outcome(engine.validate(user)))
    return EXIT_OK


def load_records(path: Path) -> list[dict[str, Any]]:
    """
    Load records from a JSON or YAML file.

    The file must hold a list of mappings, or a single mapping.
    """
    with open(path) as f:
        if path.suffix.lower() == ".json":
            data = json.load(f)
        else:
            data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise InvalidInputError(data, "input file must contain a record or a list of records")
    return data


def check_command(args) -> int:
    """
    Validate every record in an input file against a schema from a rule file.

    Args:
        args: Command line arguments
    """
    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        return EXIT_ERROR

    try:
        loader = RuleConfigLoader(args.rules)
        file_config = loader.load_engine_config()
        # Any of --strict, the rule file or TAGCHECK_STRICT turns strict mode on
        config = EngineConfig(
            strict=args.strict or file_config.strict or EngineConfig.from_env().strict
        )
        schema = loader.load_schema(args.schema)
        records = load_records(input_path)
    except (
        FileNotFoundError,
        RuleConfigError,
        RuleSyntaxError,
        InvalidInputError,
        json.JSONDecodeError,
        yaml.YAMLError,
    ) as e:
        logger.error(f"Cannot run check: {e}")
        return EXIT_ERROR

    engine = RuleEngine(config)
    invalid = 0
    with log_operation("Checking records", logger=logger, schema=schema.name, records=len(records)):
        try:
            outcomes = engine.validate_batch(records, schema)
        except (InvalidInputError, RuleSyntaxError) as e:
            logger.error(f"Cannot validate records: {e}")
            return EXIT_ERROR

        for index, outcome in enumerate(outcomes):
            if outcome.valid:
                print(f"record {index}: valid")
            else:
                invalid += 1
                print(f"record {index}: {outcome.message}")

    print(f"\n{len(outcomes) - invalid} valid, {invalid} invalid")
    return EXIT_INVALID if invalid else EXIT_OK


def rules_command(args) -> int:
    """
    Print a summary of the rules declared in a rule file.

    Args:
        args: Command line arguments
    """
    try:
        loader = RuleConfigLoader(args.rules)
        file_config = loader.load_engine_config()
        engine = RuleEngine(
            EngineConfig(strict=file_config.strict or EngineConfig.from_env().strict)
        )
        schemas = loader.load_schemas()
    except (FileNotFoundError, RuleConfigError, RuleSyntaxError) as e:
        logger.error(f"Cannot load rules: {e}")
        return EXIT_ERROR

    for schema in schemas.values():
        summary = engine.get_rule_summary(schema)
        print(f"{schema.name}: {summary['total_rules']} rule(s)")
        for field_name, count in summary["rules_by_field"].items():
            tag = schema.rule_tag(field_name) or "-"
            print(f"  {field_name:<20} {count:>3}  {tag}")
        if summary["ignored_tokens"]:
            ignored = ", ".join(repr(t) for t in summary["ignored_tokens"])
            print(f"  ignored tokens: {ignored}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate records against per-field rule tags",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the built-in sample users
  python -m tagcheck.cli.validate_cli demo

  # Validate records from a JSON file against the User schema
  python -m tagcheck.cli.validate_cli check --rules config/rules.yaml \\
      --schema User --input data/users.json

  # Reject unknown rule tokens instead of ignoring them
  python -m tagcheck.cli.validate_cli check --rules config/rules.yaml \\
      --schema User --input data/users.json --strict
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("demo", help="Validate the built-in sample users")

    check_parser = subparsers.add_parser("check", help="Validate records from a file")
    check_parser.add_argument(
        "--rules",
        required=True,
        help="Path to rule configuration YAML file"
    )
    check_parser.add_argument(
        "--schema",
        required=True,
        help="Schema name within the rule file"
    )
    check_parser.add_argument(
        "--input",
        required=True,
        help="Path to a JSON or YAML file of records"
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject unknown rule tokens and malformed thresholds"
    )

    rules_parser = subparsers.add_parser("rules", help="Summarize a rule file")
    rules_parser.add_argument(
        "--rules",
        required=True,
        help="Path to rule configuration YAML file"
    )

    return parser


COMMANDS = {
    "demo": demo_command,
    "check": check_command,
    "rules": rules_command,
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
