"""
Rule tag tokenizer and parser.

A rule tag is a comma-separated list of tokens from the vocabulary
``min=<int>``, ``max=<int>``, ``required`` and ``email``. Tokens are not
trimmed, so ``"min=2, max=32"`` produces the token ``" max=32"`` which
matches nothing.
"""

import re
from functools import lru_cache

from tagcheck.core.errors import RuleSyntaxError
from tagcheck.core.models import RuleKind, RuleToken
from tagcheck.observability.logger import get_logger

logger = get_logger(__name__)

RULE_DELIMITER = ","

# Checked in order; the first match wins.
PREFIX_RULES: tuple[tuple[str, RuleKind], ...] = (
    ("min=", RuleKind.MIN_LENGTH),
    ("max=", RuleKind.MAX_LENGTH),
)
KEYWORD_RULES: dict[str, RuleKind] = {
    "required": RuleKind.REQUIRED,
    "email": RuleKind.EMAIL,
}

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")


def tokenize(tag: str) -> list[str]:
    """
    Split a rule tag into its tokens.

    Args:
        tag: Raw rule tag, e.g. "min=2,max=32"

    Returns:
        Non-empty tokens in the order they appear; empty for an empty tag
    """
    if not tag:
        return []
    return [token for token in tag.split(RULE_DELIMITER) if token]


def parse_threshold(token: str, prefix: str, strict: bool = False) -> int:
    """
    Parse the integer suffix of a min=/max= token.

    In permissive mode a malformed suffix yields 0. In strict mode it raises,
    as does a negative threshold.

    Raises:
        RuleSyntaxError: In strict mode, if the suffix is not a non-negative integer
    """
    literal = token[len(prefix):]
    if not _INT_LITERAL.fullmatch(literal):
        if strict:
            raise RuleSyntaxError(token, f"threshold {literal!r} is not an integer")
        logger.debug(
            f"Malformed threshold in {token!r}, using 0",
            extra={"token": token},
        )
        return 0

    threshold = int(literal)
    if strict and threshold < 0:
        raise RuleSyntaxError(token, "threshold must not be negative")
    return threshold


def parse_token(token: str, strict: bool = False) -> RuleToken | None:
    """
    Classify a single token.

    Args:
        token: One token produced by tokenize()
        strict: Reject unknown tokens and malformed thresholds

    Returns:
        The parsed RuleToken, or None for an unknown token in permissive mode

    Raises:
        RuleSyntaxError: In strict mode, if the token cannot be parsed
    """
    for prefix, kind in PREFIX_RULES:
        if token.startswith(prefix):
            return RuleToken(
                kind=kind,
                raw=token,
                threshold=parse_threshold(token, prefix, strict),
            )

    kind = KEYWORD_RULES.get(token)
    if kind is not None:
        return RuleToken(kind=kind, raw=token)

    if strict:
        raise RuleSyntaxError(token, "unknown rule")
    logger.debug(f"Ignoring unknown rule token {token!r}", extra={"token": token})
    return None


@lru_cache(maxsize=256)
def parse_tag(tag: str, strict: bool = False) -> tuple[RuleToken, ...]:
    """
    Tokenize and parse a rule tag.

    Results are cached per (tag, strict); the returned tuple is immutable and
    safe to share between callers.

    Raises:
        RuleSyntaxError: In strict mode, on the first token that cannot be parsed
    """
    rules = []
    for token in tokenize(tag):
        rule = parse_token(token, strict)
        if rule is not None:
            rules.append(rule)
    return tuple(rules)


def ignored_tokens(tag: str) -> list[str]:
    """Return the tokens of a tag that permissive parsing would ignore."""
    return [token for token in tokenize(tag) if parse_token(token) is None]
