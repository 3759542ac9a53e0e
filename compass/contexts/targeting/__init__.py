"""
Targeting Context

Responsibilities:
- Scores how well a job listing fits the candidate (title, skills, location, company)
- Filters and ranks job listings
- Summarizes trends across a set of listings

Owns: Match scoring weights, ranking and filtering logic
Never: Parses job descriptions or edits resumes
"""

from compass.contexts.targeting.job_matcher import (
    JobFilter,
    JobTrends,
    MatchPreferences,
    SalaryTrend,
    analyze_trends,
    calculate_match_score,
    filter_jobs,
    get_top_jobs,
    rank_jobs,
    score_job,
)

__all__ = [
    "MatchPreferences",
    "JobFilter",
    "JobTrends",
    "SalaryTrend",
    "calculate_match_score",
    "score_job",
    "filter_jobs",
    "rank_jobs",
    "get_top_jobs",
    "analyze_trends",
]
