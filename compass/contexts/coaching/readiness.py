"""
Readiness score aggregation.

The readiness score combines five independently computed 0-100 sub-scores:

- Job match quality (30%): average match score of saved jobs, plus a momentum
  boost of 5 per application in the "applied" stage (at most 20)
- JD skill alignment (25%): average share of each analyzed job's required
  skills that the current resume covers
- Resume ATS score (25%): stored ATS score of the current resume
- Application progress (10%): average stage weight over all applications
- Practice completion (10%): half for solved problems, half for completed
  mock interviews

Every sub-score has a defined value for empty input (no saved jobs, no resume,
no analyses, no applications), so the aggregate is total.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from compass.contexts.coaching.logger import log_breakdown
from compass.contexts.intake.job_data_structure import Job
from compass.contexts.targeting.job_matcher import get_top_jobs
from compass.contexts.tracking.application_data_structure import ApplicationStage
from compass.contexts.tracking.user_state import PlacementUser, ReadinessScoreBreakdown
from compass.utils.settings import get_settings
from compass.utils.text_processing import contains_casefold, non_blank, round_half_up
from compass.utils.timestamp import now as current_time

STAGE_WEIGHTS = {
    ApplicationStage.SAVED: 10,
    ApplicationStage.APPLIED: 30,
    ApplicationStage.INTERVIEW_SCHEDULED: 50,
    ApplicationStage.INTERVIEW_COMPLETED: 70,
    ApplicationStage.OFFER: 100,
    ApplicationStage.REJECTED: 5,
}

MOMENTUM_BOOST_PER_APPLICATION = 5
MAX_MOMENTUM_BOOST = 20

# Alignment credited to an analysis that lists no required skills
NEUTRAL_ALIGNMENT = 50

MAX_WEAK_SKILL_ALERTS = 5
MAX_REPORT_RECOMMENDATIONS = 5
TOP_DASHBOARD_JOBS = 5

# (upper bound, level); scores at or above the last bound are "Expert"
READINESS_LEVELS = [
    (30, "Beginning"),
    (50, "Developing"),
    (70, "Proficient"),
    (85, "Advanced"),
]
TOP_READINESS_LEVEL = "Expert"


@dataclass
class ReadinessReport:
    score: int
    level: str
    summary: str
    recommendations: List[str] = field(default_factory=list)


@dataclass
class PipelineCounts:
    saved: int = 0
    applied: int = 0
    interview_scheduled: int = 0
    offers: int = 0


@dataclass
class DashboardSummary:
    top_job_matches: List[Job] = field(default_factory=list)
    resume_ats_score: int = 0
    jd_readiness_score: float = 0
    application_pipeline: PipelineCounts = field(default_factory=PipelineCounts)
    weak_skill_alerts: List[str] = field(default_factory=list)
    next_action_recommendation: str = ""
    readiness_score: int = 0
    breakdown: ReadinessScoreBreakdown = field(default_factory=ReadinessScoreBreakdown)


def has_skill(resume_skills: List[str], required_skill: str) -> bool:
    """True if any resume skill contains the required skill (case-insensitive)."""
    return any(contains_casefold(skill, required_skill) for skill in resume_skills)


# =============================================================================
# SUB-SCORES
# =============================================================================


def calculate_job_match_quality(user: PlacementUser) -> int:
    if not user.saved_jobs:
        return 0

    average = sum(job.match_score for job in user.saved_jobs) / len(user.saved_jobs)
    applied = len(user.applications_by_stage(ApplicationStage.APPLIED))
    boost = min(MAX_MOMENTUM_BOOST, applied * MOMENTUM_BOOST_PER_APPLICATION)
    return min(100, round_half_up(average + boost))


def calculate_jd_skill_alignment(user: PlacementUser) -> int:
    """
    Average alignment of the current resume with every stored analysis.

    0 without analyses or without a current resume; an analysis with no
    required skills contributes NEUTRAL_ALIGNMENT.
    """
    if not user.jd_analyses or user.current_resume is None:
        return 0

    resume_skills = non_blank(user.resume_skills)
    scores = []
    for analysis in user.jd_analyses.values():
        required = analysis.required_skills
        if not required:
            scores.append(NEUTRAL_ALIGNMENT)
            continue
        matched = sum(1 for skill in required if has_skill(resume_skills, skill))
        scores.append(matched / len(required) * 100)

    return round_half_up(sum(scores) / len(scores))


def calculate_resume_ats_score(user: PlacementUser) -> int:
    resume = user.current_resume
    return resume.ats_score if resume else 0


def calculate_application_progress(user: PlacementUser) -> int:
    if not user.applications:
        return 0
    total = sum(STAGE_WEIGHTS.get(app.stage, 0) for app in user.applications)
    return round_half_up(total / len(user.applications))


def calculate_practice_completion(user: PlacementUser) -> int:
    problems = user.practice_problems
    interviews = user.mock_interviews

    problems_score = sum(1 for p in problems if p.solved) / len(problems) * 50 if problems else 0
    interview_score = sum(1 for m in interviews if m.completed) / len(interviews) * 50 if interviews else 0

    return round_half_up(problems_score + interview_score)


def calculate_readiness_score(user: PlacementUser) -> ReadinessScoreBreakdown:
    """
    Compute the full readiness breakdown for a user.

    Args:
        user: Current user state

    Returns:
        ReadinessScoreBreakdown whose overall_score is the weighted, rounded
        and clamped sum of the five sub-scores
    """
    breakdown = ReadinessScoreBreakdown.from_components(
        job_match_quality=calculate_job_match_quality(user),
        jd_skill_alignment=calculate_jd_skill_alignment(user),
        resume_ats_score=calculate_resume_ats_score(user),
        application_progress=calculate_application_progress(user),
        practice_completion=calculate_practice_completion(user),
    )
    log_breakdown(user.id, breakdown)
    return breakdown


# =============================================================================
# SKILL GAPS
# =============================================================================


def skill_gap_counts(user: PlacementUser) -> Dict[str, int]:
    """
    Required skills the current resume lacks, with the number of analyses
    requiring each, most frequent first (ties keep first-seen order).
    """
    resume_skills = non_blank(user.resume_skills)
    gaps: Dict[str, int] = defaultdict(int)

    for analysis in user.jd_analyses.values():
        for skill in analysis.required_skills:
            if not has_skill(resume_skills, skill):
                gaps[skill] += 1

    return dict(sorted(gaps.items(), key=lambda item: item[1], reverse=True))


def get_weak_skill_alerts(user: PlacementUser) -> List[str]:
    """Alerts for missing skills required by more than one analyzed job (top 5)."""
    if user.current_resume is None:
        return []

    recurring = [(skill, count) for skill, count in skill_gap_counts(user).items() if count > 1]
    return [
        f"{skill} is required in {count} job descriptions - consider learning this"
        for skill, count in recurring[:MAX_WEAK_SKILL_ALERTS]
    ]


# =============================================================================
# RECOMMENDATIONS
# =============================================================================


def get_next_action_recommendation(
    user: PlacementUser,
    breakdown: Optional[ReadinessScoreBreakdown] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    The single most useful next step, chosen by a fixed priority ladder.

    Args:
        user: Current user state
        breakdown: Readiness to judge by (defaults to the user's stored one)
        now: Reference time for the "applied recently" check
    """
    readiness = breakdown or user.readiness_score
    moment = now or current_time()

    if readiness.resume_ats_score < 60:
        return "Improve your resume ATS score - fix critical issues first"

    if readiness.jd_skill_alignment < 50:
        return "Learn missing skills identified in job descriptions"

    cutoff = moment - timedelta(days=get_settings().pipeline.recent_days)
    recently_applied = [a for a in user.applications if a.applied_date and a.applied_date > cutoff]
    if not recently_applied:
        return "Start applying to matched jobs"

    upcoming = user.applications_by_stage(ApplicationStage.INTERVIEW_SCHEDULED)
    if not upcoming and len(user.applications) > 2:
        return "Great! You're actively applying. Practice mock interviews to prepare"

    if upcoming:
        return "You have upcoming interviews! Focus on preparation"

    return "Maintain consistent practice and applications"


def readiness_level(score: float) -> str:
    for upper, level in READINESS_LEVELS:
        if score < upper:
            return level
    return TOP_READINESS_LEVEL


def generate_readiness_report(
    user: PlacementUser, breakdown: Optional[ReadinessScoreBreakdown] = None
) -> ReadinessReport:
    """Qualitative report: level bucket, summary sentence and up to five recommendations."""
    readiness = breakdown or user.readiness_score
    score = readiness.overall_score
    level = readiness_level(score)

    recommendations = []

    if readiness.resume_ats_score < 70:
        recommendations.append("Optimize resume for ATS - add missing action verbs and skills")

    if readiness.jd_skill_alignment < 60:
        recommendations.append("Focus on learning high-demand skills from analyzed jobs")

    if len(user.applications) < 5:
        recommendations.append("Apply to at least 5-10 matching jobs")

    if sum(1 for p in user.practice_problems if p.solved) < 10:
        recommendations.append("Complete more practice problems to improve coding skills")

    if not any(m.completed for m in user.mock_interviews):
        recommendations.append("Schedule your first mock interview")

    lead = recommendations[0] if recommendations else "Keep up the good work!"
    summary = f"You're {level} in your placement journey with a score of {score}/100. {lead}"

    return ReadinessReport(
        score=score,
        level=level,
        summary=summary,
        recommendations=recommendations[:MAX_REPORT_RECOMMENDATIONS],
    )


def build_dashboard_summary(user: PlacementUser, now: Optional[datetime] = None) -> DashboardSummary:
    """Everything the dashboard shows, computed from a fresh readiness breakdown."""
    breakdown = calculate_readiness_score(user)

    pipeline = PipelineCounts(
        saved=len(user.applications_by_stage(ApplicationStage.SAVED)),
        applied=len(user.applications_by_stage(ApplicationStage.APPLIED)),
        interview_scheduled=len(user.applications_by_stage(ApplicationStage.INTERVIEW_SCHEDULED)),
        offers=len(user.applications_by_stage(ApplicationStage.OFFER)),
    )

    return DashboardSummary(
        top_job_matches=get_top_jobs(user.saved_jobs, TOP_DASHBOARD_JOBS),
        resume_ats_score=breakdown.resume_ats_score,
        jd_readiness_score=breakdown.jd_skill_alignment,
        application_pipeline=pipeline,
        weak_skill_alerts=get_weak_skill_alerts(user),
        next_action_recommendation=get_next_action_recommendation(user, breakdown, now=now),
        readiness_score=breakdown.overall_score,
        breakdown=breakdown,
    )
