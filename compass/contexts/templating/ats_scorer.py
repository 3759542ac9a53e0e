"""
Rule-based ATS (Applicant Tracking System) audit of a structured resume.

The score starts at 100 and each failed check subtracts a fixed penalty. Checks
are independent; every failed check adds one message to the critical, warning
or suggestion bucket.
"""

import re
from dataclasses import dataclass, field
from typing import List

from compass.contexts.templating.logger import log_ats_result
from compass.contexts.templating.resume_data_structure import SAFE_THEMES, ResumeDocument
from compass.utils.text_processing import clamp

# Action verbs an ATS-friendly resume should use
ATS_ACTION_VERBS = [
    "achieved",
    "managed",
    "improved",
    "increased",
    "implemented",
    "designed",
    "led",
    "coordinated",
    "developed",
    "created",
]

# A number followed by a unit that makes it a measurable result
METRIC_PATTERN = re.compile(r"\d+(?:%|x|times?|people|projects|years?)", re.IGNORECASE)

MIN_CONTENT_LENGTH = 300
MAX_MISSING_ACTION_VERBS = 5
MAX_SUGGESTIONS = 5

# Penalties
PERSONAL_PENALTY = 15
EXPERIENCE_PENALTY = 15
EDUCATION_PENALTY = 10
SKILLS_PENALTY = 15
SHORT_CONTENT_PENALTY = 10
ACTION_VERB_PENALTY = 10
NO_METRICS_PENALTY = 8
RESPONSIBILITIES_PENALTY = 5
THEME_PENALTY = 3


@dataclass
class ATSIssues:
    critical: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)


@dataclass
class KeywordReport:
    """Action verbs from ATS_ACTION_VERBS found in / missing from the resume."""

    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)


@dataclass
class ATSCheckResult:
    score: int = 100
    issues: ATSIssues = field(default_factory=ATSIssues)
    keywords: KeywordReport = field(default_factory=KeywordReport)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "issues": {
                "critical": list(self.issues.critical),
                "warnings": list(self.issues.warnings),
                "suggestions": list(self.issues.suggestions),
            },
            "keywords": {"found": list(self.keywords.found), "missing": list(self.keywords.missing)},
        }


def calculate_ats_score(resume: ResumeDocument) -> ATSCheckResult:
    """
    Audit a resume against the ATS checks.

    Args:
        resume: Structured resume

    Returns:
        ATSCheckResult with score in [0, 100], categorized issues and the
        action-verb keyword report
    """
    issues = ATSIssues()
    keywords = KeywordReport()
    score = 100

    # Required sections
    section_types = set(resume.section_types)

    if "personal" not in section_types:
        issues.critical.append("Missing personal information section")
        score -= PERSONAL_PENALTY
    if "experience" not in section_types and "projects" not in section_types:
        issues.critical.append("Missing work experience or projects - at least one is required")
        score -= EXPERIENCE_PENALTY
    if "education" not in section_types:
        issues.warnings.append("Missing education section - highly recommended")
        score -= EDUCATION_PENALTY
    if "skills" not in section_types:
        issues.critical.append("Missing skills section - essential for ATS")
        score -= SKILLS_PENALTY

    # Content volume
    if resume.content_length() < MIN_CONTENT_LENGTH:
        issues.warnings.append("Resume content is too short")
        score -= SHORT_CONTENT_PENALTY

    resume_text = resume.sections_json().lower()

    # Action verbs
    for verb in ATS_ACTION_VERBS:
        if verb in resume_text:
            keywords.found.append(verb)
        else:
            keywords.missing.append(verb)

    if len(keywords.missing) > MAX_MISSING_ACTION_VERBS:
        issues.suggestions.append("Add action verbs like: " + ", ".join(keywords.missing[:3]))
        score -= ACTION_VERB_PENALTY

    # Quantifiable results
    if not METRIC_PATTERN.search(resume_text):
        issues.suggestions.append("Add quantifiable metrics and numbers to make achievements more impactful")
        score -= NO_METRICS_PENALTY

    # Duty lists instead of achievements
    if "responsibilities:" in resume_text:
        issues.warnings.append('Avoid listing "Responsibilities:" - use achievements instead')
        score -= RESPONSIBILITIES_PENALTY

    # Theme (only judged when one is set)
    if resume.theme and resume.theme not in SAFE_THEMES:
        issues.suggestions.append("Consider using simpler color theme for better ATS compatibility")
        score -= THEME_PENALTY

    result = ATSCheckResult(score=int(clamp(score)), issues=issues, keywords=keywords)
    log_ats_result(resume.id, result)
    return result


def get_improvement_suggestions(ats_result: ATSCheckResult) -> List[str]:
    """
    Turn an ATS result into at most five prioritized suggestions.

    Order: first critical issue, first warning, a general line for scores
    under 70, missing action verbs, then the check's own suggestions.
    """
    suggestions = []

    if ats_result.issues.critical:
        suggestions.append(f"CRITICAL: {ats_result.issues.critical[0]} - Fix immediately")

    if ats_result.issues.warnings:
        suggestions.append(f"WARNING: {ats_result.issues.warnings[0]} - Highly recommended to fix")

    if ats_result.score < 70:
        suggestions.append("Your resume needs significant improvements for ATS")

    if ats_result.keywords.missing:
        suggestions.append(f"Add action verbs: {', '.join(ats_result.keywords.missing[:3])}")

    suggestions.extend(ats_result.issues.suggestions)

    return suggestions[:MAX_SUGGESTIONS]
