"""Placeholder marker syntax and pattern construction."""

import re
from typing import Pattern

# Any [marker] in a template, used for reporting unmatched markers
ANY_MARKER_PATTERN: Pattern = re.compile(r"\[([^\[\]]*)\]")


def build_marker_pattern(name: str, escape: bool = True) -> Pattern:
    """
    Build the pattern that finds every [name] marker in a template.

    Args:
        name: The placeholder name, used verbatim
        escape: Match the name literally. When False the name is inserted
            into the expression as-is, so characters such as ".", "*" or "("
            keep their regex meaning.

    Returns:
        Compiled pattern

    Raises:
        re.error: If escape is False and the name is not a valid expression
    """
    body = re.escape(name) if escape else name
    return re.compile(r"\[" + body + r"\]")


def fallback_marker(name: str, default_label: str = "Field") -> str:
    """
    Text rendered for a placeholder that has no value on the current row.

    Args:
        name: The placeholder name
        default_label: Label used when the name is empty

    Returns:
        "[name]", or "[default_label]" for an unnamed placeholder
    """
    return f"[{name or default_label}]"


def find_markers(template: str) -> list[str]:
    """Return the names of all [marker]s in a template, in order of appearance."""
    return [match.group(1) for match in ANY_MARKER_PATTERN.finditer(template)]
