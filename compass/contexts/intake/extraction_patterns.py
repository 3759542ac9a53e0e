"""
Vocabularies and regex patterns for job description analysis.

Pattern classes follow the convention from section_patterns.py:
- Dataclasses with frozen=True for immutability
- Class-level constants for patterns
- Module-level lists for iteration
"""

import re
from dataclasses import dataclass

from compass.contexts.intake.job_data_structure import Difficulty

# =============================================================================
# SKILL VOCABULARIES
# =============================================================================


@dataclass(frozen=True)
class SkillVocabulary:
    """
    Fixed skill vocabularies matched as case-insensitive substrings.

    TECHNICAL is scanned for both required and preferred skills; SOFT only
    contributes to preferred skills.
    """

    TECHNICAL: tuple = (
        "javascript",
        "typescript",
        "react",
        "nodejs",
        "python",
        "java",
        "sql",
        "mongodb",
        "aws",
        "docker",
        "kubernetes",
        "git",
        "rest api",
        "graphql",
        "html",
        "css",
        "tailwind",
    )

    SOFT: tuple = (
        "communication",
        "leadership",
        "teamwork",
        "problem-solving",
        "ux",
        "design",
        "agile",
        "scrum",
    )


TECHNICAL_SKILLS = list(SkillVocabulary.TECHNICAL)
SOFT_SKILLS = list(SkillVocabulary.SOFT)

# =============================================================================
# SKILL PHRASE PATTERNS (inside a requirements block)
# =============================================================================


@dataclass(frozen=True)
class SkillPhrasePatterns:
    """
    Patterns that pull a skill name out of requirement phrasing.

    The trigger words are case-insensitive; the captured skill must be a
    Capitalized word or run of Capitalized words (e.g., "must know React",
    "proficient in Google Cloud").
    """

    # "know X", "require X", "must ... X", "experience with X" (within 50 chars)
    REQUIREMENT_VERB: re.Pattern = re.compile(
        r"(?i:know|require|must|experience with)[\s\S]{0,50}?\b([A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z]+)*)\b"
    )

    # "fluent in X", "proficient with X"
    PROFICIENCY: re.Pattern = re.compile(
        r"(?i:fluent|proficient)\s+(?i:in|with)[\s\S]{0,50}?\b([A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z]+)*)\b"
    )


SKILL_PHRASE_PATTERNS = [
    SkillPhrasePatterns.REQUIREMENT_VERB,
    SkillPhrasePatterns.PROFICIENCY,
]

# Extracted phrases outside this length range are treated as noise
MIN_SKILL_PHRASE_LENGTH = 3
MAX_SKILL_PHRASE_LENGTH = 49

# =============================================================================
# EXPERIENCE PATTERNS
# =============================================================================


@dataclass(frozen=True)
class ExperiencePatterns:
    """
    Patterns for the experience requirement, tried in order; first match wins.
    """

    # "5+ years experience", "3 years of professional experience"
    YEARS_OF_EXPERIENCE: re.Pattern = re.compile(
        r"(\d+)\s*(?:\+)?\s*years?\s+(?:of\s+)?(?:professional\s+)?experience", re.IGNORECASE
    )

    # "experience: 4 years", "background: 2+ years", bare "3 years"
    LABELLED_YEARS: re.Pattern = re.compile(
        r"(?:experience|background)?:?\s*(\d+)\s*(?:\+)?\s*years?", re.IGNORECASE
    )

    # Bare seniority word
    SENIORITY: re.Pattern = re.compile(r"(?:fresher|entry.level|junior|senior|lead)", re.IGNORECASE)


EXPERIENCE_PATTERNS = [
    ExperiencePatterns.YEARS_OF_EXPERIENCE,
    ExperiencePatterns.LABELLED_YEARS,
    ExperiencePatterns.SENIORITY,
]

EXPERIENCE_NOT_SPECIFIED = "Not specified"

# =============================================================================
# RESUME KEYWORDS
# =============================================================================

RESUME_ACTION_VERBS = [
    "develop",
    "design",
    "implement",
    "manage",
    "lead",
    "improve",
    "create",
    "optimize",
    "build",
    "deliver",
]

RESUME_NOUNS = ["system", "application", "platform", "service", "infrastructure", "architecture"]

MAX_RESUME_KEYWORDS = 20

# =============================================================================
# RESPONSIBILITIES
# =============================================================================

# Bullet and line delimiters inside a responsibilities block
RESPONSIBILITY_DELIMITERS = re.compile(r"[\n•\-*]")

# Items of this length or shorter are fragments, not responsibilities
MIN_RESPONSIBILITY_LENGTH = 10
MAX_RESPONSIBILITIES = 8

# =============================================================================
# DIFFICULTY
# =============================================================================

DIFFICULTY_MARKERS = {
    Difficulty.EASY: ["junior", "entry-level", "fresher", "internship", "no experience required"],
    Difficulty.MEDIUM: ["intermediate", "2-3 years", "mid-level"],
    Difficulty.HARD: ["senior", "5+ years", "lead", "architect", "principal"],
}

# Preparation hours = base + skills * per_skill
PREPARATION_BASE_HOURS = {
    Difficulty.EASY: 5,
    Difficulty.MEDIUM: 15,
    Difficulty.HARD: 30,
}

PREPARATION_HOURS_PER_SKILL = {
    Difficulty.EASY: 1,
    Difficulty.MEDIUM: 3,
    Difficulty.HARD: 5,
}

# =============================================================================
# SKILL COMPARISON
# =============================================================================

# Alignment reported when a job lists no required skills
NEUTRAL_ALIGNMENT_SCORE = 50
