"""Fragment classification against the expected-token set."""

import re
from typing import Optional

from .types import AFTER_SCALAR, Rule, TokenKind

# Strict float literal: no underscores, no inner whitespace.
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)",
    re.IGNORECASE,
)

# Characters that never belong inside a field name fragment.
_NAME_BREAKERS = frozenset('{}[]():",\\')


def is_float_literal(fragment: str) -> bool:
    """
    Check whether a fragment is a float literal.

    Accepts an optional sign followed by ``inf``, ``infinity``, ``nan`` or a
    decimal number with optional fraction and exponent. Python's ``float()``
    is more lenient (underscores, surrounding whitespace) so it is not used.

    Args:
        fragment: Stripped fragment text

    Returns:
        True if the fragment parses as a floating point number
    """
    return _FLOAT_LITERAL.fullmatch(fragment) is not None


def starts_with_uppercase(fragment: str) -> bool:
    """Return True if the first character is an ASCII uppercase letter."""
    return bool(fragment) and "A" <= fragment[0] <= "Z"


def classify(fragment: str, expecting: TokenKind) -> Optional[Rule]:
    """
    Classify one stripped fragment.

    Rules are tried in order and the first match wins. The string body rule
    comes before the field name rule so that anything inside a quoted string
    is kept verbatim, and field names never start with an uppercase letter
    so that type names and variant tags are not mistaken for fields.

    Args:
        fragment: Fragment with surrounding whitespace already removed
        expecting: Set of token kinds acceptable at this point

    Returns:
        The matching Rule, or None if the fragment must be dropped
    """
    if fragment == "{" and TokenKind.OPEN_BRACE in expecting:
        return Rule.OPEN_BRACE
    if fragment == "}" and TokenKind.CLOSE_BRACE in expecting:
        return Rule.CLOSE_BRACE
    if fragment in ("[", "(") and TokenKind.OPEN_BRACKET in expecting:
        return Rule.OPEN_BRACKET
    if fragment in ("]", ")") and TokenKind.CLOSE_BRACKET in expecting:
        return Rule.CLOSE_BRACKET
    if fragment == ":" and TokenKind.COLON in expecting:
        return Rule.COLON
    if fragment == '"':
        if TokenKind.STRING_START in expecting:
            return Rule.STRING_START
        if TokenKind.STRING_END in expecting:
            return Rule.STRING_END
    if TokenKind.NUMBER in expecting:
        if fragment in ("true", "false"):
            return Rule.BOOLEAN
        if is_float_literal(fragment):
            return Rule.NUMBER
    if TokenKind.STRING_BODY in expecting:
        return Rule.STRING_BODY
    if TokenKind.FIELD_NAME in expecting and not starts_with_uppercase(fragment):
        return Rule.FIELD_NAME
    return None


def is_field_name(name: object) -> bool:
    """
    Check whether a mapping key can be written as a field name.

    The key has to come through as a single field name fragment at every
    position where a field may start, including right after a scalar where
    numbers and booleans are also accepted. Delimiters, whitespace and
    backslashes would split or corrupt the fragment.

    Args:
        name: Mapping key

    Returns:
        True if the key survives classification as a field name
    """
    if not isinstance(name, str) or not name:
        return False
    if any(c in _NAME_BREAKERS or c.isspace() or not c.isprintable() for c in name):
        return False
    return classify(name, AFTER_SCALAR) is Rule.FIELD_NAME
