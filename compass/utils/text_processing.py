"""
Text processing utilities for keyword matching and display.

All comparisons in COMPASS are case-insensitive substring checks; the helpers
here keep that convention in one place.
"""

import math
from typing import Iterable, List


def contains_casefold(haystack: str, needle: str) -> bool:
    """True if needle occurs in haystack, ignoring case."""
    return needle.lower() in haystack.lower()


def mutual_substring(first: str, second: str) -> bool:
    """
    True if either string contains the other, ignoring case.

    Example:
        >>> mutual_substring("React", "react native")
        True
        >>> mutual_substring("node.js", "node")
        True
    """
    first_lower = first.lower()
    second_lower = second.lower()
    return first_lower in second_lower or second_lower in first_lower


def non_blank(items: Iterable[str]) -> List[str]:
    """Drop empty and whitespace-only strings (an empty string is a substring of everything)."""
    return [item for item in items if isinstance(item, str) and item.strip()]


def unique_in_order(items: Iterable[str]) -> List[str]:
    """Exact-match de-duplication that keeps first occurrences in order."""
    return list(dict.fromkeys(items))


def unique_sorted_casefold(items: Iterable[str]) -> List[str]:
    """Lowercase, de-duplicate and sort alphabetically."""
    return sorted({item.lower() for item in items})


def split_words(text: str) -> List[str]:
    """Whitespace tokenization (runs of whitespace never produce empty tokens)."""
    return text.split()


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with halves rounded up.

    Python's round() uses banker's rounding (round(72.5) == 72); scores follow
    the conventional rule so that 72.5 becomes 73.
    """
    return math.floor(value + 0.5)


def clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    return max(lower, min(upper, value))

