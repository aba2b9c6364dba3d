"""
Table selection by include/exclude patterns.

Patterns support a single leading and/or trailing ``*`` wildcard:
``*`` (everything), ``*middle*``, ``prefix*``, ``*suffix`` and exact names.
"""

from typing import Optional

from .config import TableNamePatterns


def matches_pattern(text: str, pattern: str) -> bool:
    """
    Check a table name against one pattern.

    Args:
        text: Table name
        pattern: Wildcard pattern

    Returns:
        True if the name matches
    """
    if pattern == "*":
        return True

    if "*" not in pattern:
        return text == pattern

    if len(pattern) >= 2 and pattern.startswith("*") and pattern.endswith("*"):
        return pattern[1:-1] in text
    if pattern.startswith("*"):
        return text.endswith(pattern[1:])
    if pattern.endswith("*"):
        return text.startswith(pattern[:-1])

    # Wildcard in the middle is not supported; treat literally
    return text == pattern


def should_include(table_name: str, patterns: Optional[TableNamePatterns] = None) -> bool:
    """
    Decide whether a table takes part in generation.

    Exclude patterns are checked first; then the table must match at least
    one include pattern. Without patterns every table is included.
    """
    if patterns is None:
        return True

    if any(matches_pattern(table_name, pattern) for pattern in patterns.exclude):
        return False

    return any(matches_pattern(table_name, pattern) for pattern in patterns.include)
