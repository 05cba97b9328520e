"""
Identifier utilities for shapeshare.

Provides the case conversion and sanitization rules shared by backends.
"""

from __future__ import annotations

# Characters that cannot appear in target-language identifiers
ILLEGAL_IDENTIFIER_CHARS = "-"


def to_pascal_case(name: str) -> str:
    """
    Convert an identifier to PascalCase.

    Underscores and dashes start a new word. An all-uppercase identifier
    is treated as one word, so its case is not preserved.

    Examples:
        >>> to_pascal_case("ready_state")
        'ReadyState'
        >>> to_pascal_case("AnonymousStruct")
        'AnonymousStruct'
        >>> to_pascal_case("URL")
        'Url'
    """
    to_lowercase = name.upper() == name
    result = []
    capitalize = True
    for ch in name:
        if ch in "_-":
            capitalize = True
        elif capitalize:
            result.append(ch.upper())
            capitalize = False
        else:
            result.append(ch.lower() if to_lowercase else ch)
    return "".join(result)


def remove_dash_from_identifier(name: str) -> str:
    """
    Make an identifier legal by replacing dashes.

    Examples:
        >>> remove_dash_from_identifier("user-id")
        'user_id'
    """
    return name.replace("-", "_")


def needs_sanitizing(name: str) -> bool:
    """Check if an identifier contains characters illegal in target languages."""
    return any(ch in ILLEGAL_IDENTIFIER_CHARS for ch in name)


def escape_leading_digit(name: str) -> str:
    """
    Prefix an underscore when a name begins with a digit.

    Examples:
        >>> escape_leading_digit("1Password")
        '_1Password'
        >>> escape_leading_digit("Ready")
        'Ready'
    """
    first = name[:1]
    if first.isascii() and first.isdigit():
        return f"_{name}"
    return name
