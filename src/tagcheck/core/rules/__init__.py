"""
Rule tag parsing, dispatch, configuration and the rule engine.
"""

from .dispatcher import VALIDATOR_REGISTRY, apply_rules, build_validator, dispatch
from .rule_config import EngineConfig, RecordSchemaBuilder, RuleConfigLoader
from .rule_engine import RuleEngine, validate
from .tokenizer import ignored_tokens, parse_tag, parse_token, tokenize

__all__ = [
    "RuleEngine",
    "validate",
    "EngineConfig",
    "RuleConfigLoader",
    "RecordSchemaBuilder",
    "VALIDATOR_REGISTRY",
    "apply_rules",
    "build_validator",
    "dispatch",
    "ignored_tokens",
    "parse_tag",
    "parse_token",
    "tokenize",
]
