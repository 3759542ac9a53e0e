"""
Job match scoring, filtering and ranking.

A job's match score is a weighted sum of four independently scored factors
(title, skills, location, company), each 0-100. Every factor falls back to a
neutral 50 when there is nothing to compare against, so the score is defined
for any job and any (possibly empty) preferences.
"""

from collections import defaultdict
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from compass.contexts.intake.job_data_structure import Job
from compass.utils.text_processing import (
    clamp,
    contains_casefold,
    mutual_substring,
    non_blank,
    round_half_up,
    split_words,
)

# Factor weights (sum to 1.0)
TITLE_WEIGHT = 0.3
SKILLS_WEIGHT = 0.4
LOCATION_WEIGHT = 0.15
COMPANY_WEIGHT = 0.15

# Factor score when there is nothing to compare against
NEUTRAL_FACTOR_SCORE = 50
LOCATION_MISMATCH_SCORE = 30
COMPANY_MISMATCH_SCORE = 40

TOP_SKILLS_COUNT = 10
TOP_ROLES_COUNT = 5


@dataclass
class MatchPreferences:
    """What the candidate is looking for. Empty fields mean "no preference"."""

    target_role: Optional[str] = None
    target_companies: List[str] = field(default_factory=list)
    preferred_locations: List[str] = field(default_factory=list)


@dataclass
class JobFilter:
    """
    AND-combined substring filters. None/empty means "don't filter on this".

    keywords match if ANY keyword appears in the title or the description.
    """

    title: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    location: Optional[str] = None


@dataclass
class SalaryTrend:
    min: int = 0
    max: int = 0
    avg: int = 0


@dataclass
class JobTrends:
    common_skills: List[str] = field(default_factory=list)
    common_roles: List[str] = field(default_factory=list)
    salary_trend: SalaryTrend = field(default_factory=SalaryTrend)


# =============================================================================
# MATCH SCORE
# =============================================================================


def calculate_title_match(job_title: str, target_role: Optional[str]) -> float:
    """
    100 if the titles contain one another, otherwise the share of title words
    the two have in common (relative to the longer title).
    """
    if not target_role:
        return NEUTRAL_FACTOR_SCORE

    if mutual_substring(job_title, target_role):
        return 100

    job_words = split_words(job_title.lower())
    target_words = split_words(target_role.lower())
    longest = max(len(job_words), len(target_words))
    if longest == 0:
        return 0

    common = sum(1 for word in job_words if word in target_words)
    return common / longest * 100


def calculate_skills_match(requirements: List[str], resume_skills: Iterable[str]) -> float:
    """Percentage of job requirements found in the resume skills (substring, either direction)."""
    if not requirements:
        return NEUTRAL_FACTOR_SCORE

    skills = non_blank(resume_skills)
    matched = [req for req in requirements if any(mutual_substring(req, skill) for skill in skills)]
    return len(matched) / len(requirements) * 100


def calculate_location_match(job_location: str, preferred_locations: List[str]) -> float:
    if not preferred_locations:
        return NEUTRAL_FACTOR_SCORE
    if any(contains_casefold(job_location, loc) for loc in preferred_locations):
        return 100
    return LOCATION_MISMATCH_SCORE


def calculate_company_match(company: str, target_companies: List[str]) -> float:
    if not target_companies:
        return NEUTRAL_FACTOR_SCORE
    if any(contains_casefold(company, target) for target in target_companies):
        return 100
    return COMPANY_MISMATCH_SCORE


def calculate_match_score(
    job: Job, resume_skills: Iterable[str], preferences: Optional[MatchPreferences] = None
) -> int:
    """
    Score how well a job fits the candidate.

    Args:
        job: Job listing
        resume_skills: Skills from the candidate's resume
        preferences: Target role, companies and locations (None = no preferences)

    Returns:
        Integer score in [0, 100]

    Example:
        >>> job = Job(id="1", title="Frontend Developer", company="Acme", requirements=[])
        >>> calculate_match_score(job, [], MatchPreferences(target_role="Frontend Developer"))
        65
    """
    preferences = preferences or MatchPreferences()

    score = (
        calculate_title_match(job.title, preferences.target_role) * TITLE_WEIGHT
        + calculate_skills_match(job.requirements, resume_skills) * SKILLS_WEIGHT
        + calculate_location_match(job.location, preferences.preferred_locations) * LOCATION_WEIGHT
        + calculate_company_match(job.company, preferences.target_companies) * COMPANY_WEIGHT
    )
    return round_half_up(clamp(score))


def score_job(
    job: Job, resume_skills: Iterable[str], preferences: Optional[MatchPreferences] = None
) -> Job:
    """Copy of job with match_score filled in."""
    return replace(job, match_score=calculate_match_score(job, resume_skills, preferences))


# =============================================================================
# FILTERING AND RANKING
# =============================================================================


def _passes(job: Job, criteria: JobFilter) -> bool:
    if criteria.title and not contains_casefold(job.title, criteria.title):
        return False

    if criteria.keywords:
        has_keyword = any(
            contains_casefold(job.description, keyword) or contains_casefold(job.title, keyword)
            for keyword in criteria.keywords
        )
        if not has_keyword:
            return False

    if criteria.location and not contains_casefold(job.location, criteria.location):
        return False

    return True


def filter_jobs(jobs: Iterable[Job], criteria: Optional[JobFilter] = None) -> List[Job]:
    """Jobs satisfying every filter set in criteria, in input order."""
    criteria = criteria or JobFilter()
    return [job for job in jobs if _passes(job, criteria)]


def rank_jobs(jobs: Iterable[Job]) -> List[Job]:
    """New list sorted by match_score, highest first. Ties keep input order."""
    return sorted(jobs, key=lambda job: job.match_score, reverse=True)


def get_top_jobs(jobs: Iterable[Job], count: int = 5) -> List[Job]:
    return rank_jobs(jobs)[:count]


# =============================================================================
# TRENDS
# =============================================================================


def _most_common(counts: Dict[str, int], limit: int) -> List[str]:
    """Keys by descending count; ties keep first-seen order."""
    return [key for key, _ in sorted(counts.items(), key=lambda item: item[1], reverse=True)][:limit]


def analyze_trends(jobs: Iterable[Job]) -> JobTrends:
    """
    Summarize a set of jobs.

    common_skills are the 10 most frequent requirement strings, common_roles the
    5 most frequent title words. The salary trend pools every min and max bound;
    all three figures are 0 when no job lists a salary.
    """
    skill_counts: Dict[str, int] = defaultdict(int)
    role_counts: Dict[str, int] = defaultdict(int)
    salaries: List[int] = []

    for job in jobs:
        for requirement in job.requirements:
            skill_counts[requirement] += 1

        for word in split_words(job.title):
            role_counts[word] += 1

        if job.salary:
            salaries.extend([job.salary.min, job.salary.max])

    if salaries:
        salary_trend = SalaryTrend(
            min=min(salaries),
            max=max(salaries),
            avg=round_half_up(sum(salaries) / len(salaries)),
        )
    else:
        salary_trend = SalaryTrend()

    return JobTrends(
        common_skills=_most_common(skill_counts, TOP_SKILLS_COUNT),
        common_roles=_most_common(role_counts, TOP_ROLES_COUNT),
        salary_trend=salary_trend,
    )
