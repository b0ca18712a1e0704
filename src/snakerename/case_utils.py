"""Identifier validation and case transformation.

Identifiers are recognised by ASCII character classes only, no language grammar.
"""

import re

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_CAMEL_HUMP = re.compile(r"([a-z])([A-Z])")
_ACRONYM_RUN = re.compile(r"([A-Z]+)([A-Z][a-z])")


def is_identifier_char(char: str) -> bool:
    """Check if a single character may appear inside an identifier."""
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z") or ("0" <= char <= "9")


def is_valid_identifier(text) -> bool:
    """Check if text is a usable identifier token.

    Anything that is not a non-empty string is simply not an identifier, so
    this never raises.

    Examples:
        >>> is_valid_identifier('_x1')
        True
        >>> is_valid_identifier('123abc')
        False
        >>> is_valid_identifier(None)
        False
    """
    if not text or not isinstance(text, str):
        return False
    return IDENTIFIER_PATTERN.fullmatch(text) is not None


def to_snake_case(text: str) -> str:
    """Convert a camelCase, PascalCase or separated identifier to snake_case.

    Callers are expected to validate with is_valid_identifier first.

    Args:
        text: Identifier in any case style

    Returns:
        snake_case string

    Examples:
        >>> to_snake_case('someVariableName')
        'some_variable_name'
        >>> to_snake_case('HTTPServer')
        'http_server'
        >>> to_snake_case('Some_Variable')
        'some_variable'
        >>> to_snake_case('NAME')
        'name'
    """
    if not text:
        return text

    # Pattern 1: Insert underscore between a lowercase letter and an uppercase one
    # Handles: "someVariable" -> "some_Variable"
    s1 = _CAMEL_HUMP.sub(r"\1_\2", text)

    # Pattern 2: Split before the last capital of a run when followed by lowercase
    # Handles: "HTTPServer" -> "HTTP_Server"; a trailing run like "parseABC" stays whole
    s2 = _ACRONYM_RUN.sub(r"\1_\2", s1)

    return s2.lower()
