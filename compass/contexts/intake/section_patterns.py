"""
Pattern matching for job description section identification.

Two families of patterns live here:
- Inline block patterns: locate a "Requirements:" or "Responsibilities:" run of
  text inside unstructured prose (used by RegexSegmenter)
- Markdown header and archetype patterns: split a markdown job description into
  named sections and classify each (used by MarkdownSegmenter)
"""

import re
from dataclasses import dataclass
from typing import Optional

# =============================================================================
# INLINE BLOCK PATTERNS
# =============================================================================


@dataclass(frozen=True)
class InlineBlockPatterns:
    """
    Lookahead-bounded blocks inside free text.

    Each pattern captures the text after the heading word up to the next
    heading word, or the end of the text.
    """

    # "Requirements: ..." up to responsibilities/qualifications/about
    REQUIREMENTS: re.Pattern = re.compile(
        r"requirements?:?([\s\S]*?)(?:responsibilities|qualifications|about|\Z)", re.IGNORECASE
    )

    # "Responsibilities: ..." up to requirements/qualifications/benefits
    RESPONSIBILITIES: re.Pattern = re.compile(
        r"responsibilities?:?([\s\S]*?)(?:requirements|qualifications|benefits|\Z)", re.IGNORECASE
    )


# =============================================================================
# MARKDOWN HEADER PATTERNS
# =============================================================================


@dataclass(frozen=True)
class MarkdownHeaderPatterns:
    """
    Regex patterns for detecting markdown section headers.

    Supports bold markdown (**Header**), ATX headers (# Header) and plain
    "Header:" lines on their own.
    """

    # **Section Name** or **Section Name:** at start of line
    BOLD_HEADER: str = r"\*\*([^*]+?):?\*\*"

    # # Header through #### Header
    HASH_HEADER: str = r"^#{1,4}\s+(.+?):?\s*$"

    # "What You'll Do:" alone on a line (short, ends with a colon)
    COLON_HEADER: str = r"^([A-Za-z][A-Za-z '&/-]{1,40}):\s*$"


# Bullet line: "* text", "- text" or "• text"
BULLET_LINE = re.compile(r"^[\*\-•]\s+(.+)$")

# =============================================================================
# SECTION ARCHETYPE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class SectionArchetypePatterns:
    """
    Regex patterns for categorizing section names into archetypes.

    Not exhaustive; collected from real job listings.
    """

    REQUIRED_QUALIFICATION: tuple = (
        r"you have",
        r"basic qualifications?",
        r"required qualifications?",
        r"minimum qualifications?",
        r"requirements?",
        r"must\-? ?have",
        r"required skills?",
        r"what you'?ll need",
        r"what you('ll)? bring",
        r"^qualifications?$",
    )

    PREFERRED_QUALIFICATION: tuple = (
        r"nice (?:if you )?have",
        r"nice to have",
        r"preferred qualifications?",
        r"preferred skills?",
        r"^preferred$",
        r"bonus",
        r"desired:?",
    )

    RESPONSIBILITIES: tuple = (
        r"what you'?ll (?:be )?do(?:ing)?",
        r"responsibilities",
        r"your (?:role|responsibilities)",
        r"duties",
    )

    ABOUT: tuple = (
        r"about (?:the )?(?:company|us|role|team|position)",
        r"who we are",
        r"job (?:summary|description)",
    )

    BENEFITS: tuple = (
        r"benefits",
        r"compensation",
        r"what we offer",
        r"perks",
    )


# Archetype priorities (higher = more specific) for names matching several archetypes
ARCHETYPE_PRIORITY = {
    "about": 1,
    "benefits": 2,
    "responsibilities": 4,
    "preferred_qualifications": 5,
    "required_qualifications": 5,
}

ARCHETYPE_PATTERNS = {
    "preferred_qualifications": list(SectionArchetypePatterns.PREFERRED_QUALIFICATION),
    "required_qualifications": list(SectionArchetypePatterns.REQUIRED_QUALIFICATION),
    "responsibilities": list(SectionArchetypePatterns.RESPONSIBILITIES),
    "about": list(SectionArchetypePatterns.ABOUT),
    "benefits": list(SectionArchetypePatterns.BENEFITS),
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================


def normalize_section_name(name: str) -> str:
    """Lowercase, strip and collapse internal whitespace."""
    return re.sub(r"\s+", " ", name.lower().strip())


def match_section_archetype(section_name: str) -> Optional[str]:
    """
    Match a section name to an archetype.

    Preferred qualifications are checked before required ones so that
    "Preferred Qualifications" never lands in the required bucket. If several
    archetypes match, the highest-priority one wins (ties keep check order).

    Returns:
        Archetype name, or None if no pattern matches
    """
    normalized = normalize_section_name(section_name)

    matches = []
    for archetype, patterns in ARCHETYPE_PATTERNS.items():
        if any(re.search(pattern, normalized) for pattern in patterns):
            matches.append(archetype)

    if not matches:
        return None

    return max(matches, key=lambda a: ARCHETYPE_PRIORITY.get(a, 0))
