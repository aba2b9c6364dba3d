"""
Naming utilities for code generation.

Handles case conversion between the naming styles used by the
supported target languages (struct names, field names, file names).
"""

import re
from enum import Enum
from typing import List

from ...logging_config import get_logger

logger = get_logger(__name__)


class NamingCase(Enum):
    """Case identifiers accepted in configuration."""

    PASCAL_CASE = "PascalCase"  # UserName
    CAMEL_CASE = "camelCase"  # userName
    SNAKE_CASE = "snake_case"  # user_name
    KEBAB_CASE = "kebab-case"  # user-name
    SCREAMING_SNAKE = "SCREAMING_SNAKE_CASE"  # USER_NAME


# lowerUpper and digitUpper boundaries: userId -> user_Id
_LOWER_UPPER_RE = re.compile(r"([a-z0-9])([A-Z])")
# acronym followed by a word: HTTPResponse -> HTTP_Response
_ACRONYM_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]+")


def split_words(value: str) -> List[str]:
    """
    Split an identifier into its lowercase words.

    Args:
        value: Identifier in any supported case style

    Returns:
        List of lowercase words (empty for blank input)
    """
    text = _ACRONYM_RE.sub(r"\1_\2", str(value))
    text = _LOWER_UPPER_RE.sub(r"\1_\2", text)
    return [word.lower() for word in _SEPARATOR_RE.split(text) if word]


def to_snake_case(value: str) -> str:
    """Convert to snake_case."""
    return "_".join(split_words(value))


def to_screaming_snake_case(value: str) -> str:
    """Convert to SCREAMING_SNAKE_CASE."""
    return to_snake_case(value).upper()


def to_kebab_case(value: str) -> str:
    """Convert to kebab-case."""
    return "-".join(split_words(value))


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase."""
    return "".join(word.capitalize() for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert to camelCase."""
    words = split_words(value)
    if not words:
        return ""
    return words[0] + "".join(word.capitalize() for word in words[1:])


_CONVERTERS = {
    NamingCase.PASCAL_CASE: to_pascal_case,
    NamingCase.CAMEL_CASE: to_camel_case,
    NamingCase.SNAKE_CASE: to_snake_case,
    NamingCase.KEBAB_CASE: to_kebab_case,
    NamingCase.SCREAMING_SNAKE: to_screaming_snake_case,
}


def convert_case(value: str, case: str) -> str:
    """
    Convert a name to the requested case style.

    Unknown case identifiers leave the name untouched so that a typo in
    the configuration never stops a run.

    Args:
        value: Name to convert
        case: A NamingCase value (e.g. "PascalCase") or NamingCase member

    Returns:
        Converted name
    """
    if isinstance(case, NamingCase):
        naming_case = case
    else:
        try:
            naming_case = NamingCase(case)
        except ValueError:
            logger.debug("Unknown naming case %r, keeping %r unchanged", case, value)
            return value

    return _CONVERTERS[naming_case](value)


def capitalize(value: str) -> str:
    """Uppercase the first character only."""
    value = str(value)
    return value[:1].upper() + value[1:]


def uncapitalize(value: str) -> str:
    """Lowercase the first character only."""
    value = str(value)
    return value[:1].lower() + value[1:]


def pluralize(word: str) -> str:
    """Naive English pluralization used by templates."""
    word = str(word)
    if word.endswith("y"):
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch")):
        return word + "es"
    return word + "s"
