"""
Placeholder substitution over JSON-shaped template values.

A placeholder is a literal ``{{KEY}}`` token inside a string. Substitution
walks strings, sequences and mappings, always returning new containers, so
the value passed in is never modified.
"""

import re
from enum import Enum
from typing import Any, Mapping, Optional, Pattern

from integration_gateway.core.constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN

Placeholders = Optional[Mapping[str, Optional[str]]]


class ValueKind(str, Enum):
    STRING = "string"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    SCALAR = "scalar"


def classify(value: Any) -> ValueKind:
    """Classify a JSON-shaped value for the substitution walk."""
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def placeholder_token(key: str) -> str:
    return f"{PLACEHOLDER_OPEN}{key}{PLACEHOLDER_CLOSE}"


def _token_pattern(placeholders: Mapping[str, Optional[str]]) -> Pattern[str]:
    # Longest token first so overlapping keys resolve to the most specific one
    tokens = sorted((placeholder_token(key) for key in placeholders), key=len, reverse=True)
    return re.compile("|".join(re.escape(token) for token in tokens))


def replace_placeholders(text: str, placeholders: Placeholders) -> str:
    """
    Replace every ``{{KEY}}`` token in a string.

    All tokens are replaced in a single left-to-right pass: replacement values
    are never scanned again, so a value containing another token is inserted
    verbatim. Tokens without a matching key stay untouched and a None value
    is replaced with an empty string.

    Args:
        text: String possibly containing placeholder tokens
        placeholders: Mapping of placeholder key to replacement value

    Returns:
        The substituted string
    """
    if not placeholders:
        return text

    values = {
        placeholder_token(key): "" if value is None else str(value)
        for key, value in placeholders.items()
    }
    return _token_pattern(placeholders).sub(lambda match: values[match.group(0)], text)


def substitute_placeholders(value: Any, placeholders: Placeholders = None) -> Any:
    """
    Apply placeholder substitution to an arbitrary JSON-shaped value.

    Strings are substituted, sequences and mappings are rebuilt element-wise
    (sequences come back as lists, mappings as dicts with the same keys) and
    every other value is returned as is.
    """
    kind = classify(value)
    if kind is ValueKind.STRING:
        return replace_placeholders(value, placeholders)
    if kind is ValueKind.SEQUENCE:
        return [substitute_placeholders(item, placeholders) for item in value]
    if kind is ValueKind.MAPPING:
        return {key: substitute_placeholders(item, placeholders) for key, item in value.items()}
    return value
