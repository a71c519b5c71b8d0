"""
Dispatch parsed rules to their validators.
"""

from typing import Iterable

from tagcheck.core.errors import RuleViolation
from tagcheck.core.models import LENGTH_KINDS, FieldDescriptor, RuleKind, RuleToken
from tagcheck.core.validators import (
    BaseValidator,
    EmailValidator,
    MaxLengthValidator,
    MinLengthValidator,
    RequiredFieldValidator,
)

VALIDATOR_REGISTRY: dict[RuleKind, type[BaseValidator]] = {
    RuleKind.MIN_LENGTH: MinLengthValidator,
    RuleKind.MAX_LENGTH: MaxLengthValidator,
    RuleKind.REQUIRED: RequiredFieldValidator,
    RuleKind.EMAIL: EmailValidator,
}


def build_validator(rule: RuleToken, field_name: str) -> BaseValidator:
    """
    Instantiate the validator for a parsed rule.

    Args:
        rule: Parsed rule token
        field_name: Field the rule applies to

    Returns:
        Validator bound to the field
    """
    validator_class = VALIDATOR_REGISTRY[rule.kind]
    parameters = {"threshold": rule.threshold} if rule.kind in LENGTH_KINDS else {}
    return validator_class(field_name, parameters)


def dispatch(rule: RuleToken, descriptor: FieldDescriptor) -> None:
    """
    Run one rule against one field.

    Raises:
        RuleViolation: If the field value fails the rule
    """
    build_validator(rule, descriptor.name).validate(descriptor.value)


def apply_rules(rules: Iterable[RuleToken], descriptor: FieldDescriptor) -> RuleViolation | None:
    """
    Run rules against a field in order, stopping at the first failure.

    Returns:
        The first RuleViolation, or None if every rule passed
    """
    for rule in rules:
        try:
            dispatch(rule, descriptor)
        except RuleViolation as violation:
            return violation
    return None
