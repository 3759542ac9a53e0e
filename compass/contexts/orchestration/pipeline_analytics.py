"""
Application pipeline analytics: momentum, stalled applications, next steps and
an overall pipeline health score.

Applications without an applied_date are never counted as recent or stalled
and are left out of time averages.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterable, List, Mapping, Optional

from compass.contexts.intake.job_data_structure import JDAnalysis
from compass.contexts.templating.resume_data_structure import ResumeDocument
from compass.contexts.tracking.application_data_structure import Application, ApplicationStage
from compass.utils.settings import get_settings
from compass.utils.text_processing import clamp, round_half_up
from compass.utils.timestamp import days_between
from compass.utils.timestamp import now as current_time

MAX_APPLY_SUGGESTION = 3
MAX_FOCUS_KEYWORDS = 5

HEALTH_BASE = 50
HEALTH_PER_IN_PROGRESS = 5
MAX_IN_PROGRESS_BONUS = 20
HEALTH_PER_OFFER = 10

# (upper bound, status, analysis); health at or above the last bound is Excellent
HEALTH_STATUSES = [
    (30, "Critical", "You need to apply to more jobs and improve your resume"),
    (60, "Warning", "Your pipeline needs more momentum - keep applying"),
    (80, "Good", "Good progress - maintain consistency"),
]
TOP_HEALTH_STATUS = ("Excellent", "Excellent! Your pipeline is very healthy")


@dataclass
class ApplicationMomentum:
    average_time_to_interview: int = 0  # days
    average_time_to_offer: int = 0  # days
    conversion_rate: int = 0  # percent
    typical_pipeline: str = ""


@dataclass
class NextSteps:
    immediate: List[str] = field(default_factory=list)
    follow_up: List[str] = field(default_factory=list)
    preparation: List[str] = field(default_factory=list)


@dataclass
class PipelineHealth:
    health: int
    status: str
    analysis: str


def analyze_application_momentum(
    applications: Iterable[Application], now: Optional[datetime] = None
) -> ApplicationMomentum:
    """
    How quickly applications progress.

    Time to interview averages applied -> interview date (or now, if none is
    scheduled) over every application past the saved stage. Time to offer
    averages applied -> now over offers. Conversion rate is the share of
    non-saved applications that were not rejected.
    """
    moment = now or current_time()
    applications = list(applications)

    sent = [a for a in applications if a.stage != ApplicationStage.SAVED]
    converted = [a for a in sent if a.stage != ApplicationStage.REJECTED]

    interview_days = [
        days_between(a.applied_date, a.interview_date or moment) for a in sent if a.applied_date
    ]
    average_to_interview = round_half_up(sum(interview_days) / len(interview_days)) if interview_days else 0

    offer_days = [
        days_between(a.applied_date, moment)
        for a in applications
        if a.stage == ApplicationStage.OFFER and a.applied_date
    ]
    average_to_offer = round_half_up(sum(offer_days) / len(offer_days)) if offer_days else 0

    conversion_rate = round_half_up(len(converted) / len(sent) * 100) if sent else 0

    pipeline = "Applied → Initial Review"
    if average_to_interview > 0:
        pipeline += f" → Interview ({average_to_interview} days)"
    if average_to_offer > 0:
        pipeline += f" → Offer ({average_to_offer} days)"

    return ApplicationMomentum(
        average_time_to_interview=average_to_interview,
        average_time_to_offer=average_to_offer,
        conversion_rate=conversion_rate,
        typical_pipeline=pipeline,
    )


def identify_stalled_applications(
    applications: Iterable[Application],
    stalled_days_threshold: Optional[float] = None,
    now: Optional[datetime] = None,
) -> List[Application]:
    """
    Non-terminal applications sent more than the threshold (default 14) days ago.

    Offers and rejections are never stalled, whatever their age.
    """
    moment = now or current_time()
    if stalled_days_threshold is None:
        stalled_days_threshold = get_settings().pipeline.stalled_days

    return [
        app
        for app in applications
        if not app.stage.is_terminal
        and app.applied_date is not None
        and days_between(app.applied_date, moment) > stalled_days_threshold
    ]


def generate_next_steps(
    applications: Iterable[Application],
    resume: Optional[ResumeDocument],
    jd_analyses: Mapping[str, JDAnalysis],
) -> NextSteps:
    """Immediate, follow-up and preparation steps from stage counts and resume/JD state."""
    applications = list(applications)
    steps = NextSteps()

    saved = [a for a in applications if a.stage == ApplicationStage.SAVED]
    completed = [a for a in applications if a.stage == ApplicationStage.INTERVIEW_COMPLETED]
    scheduled = [a for a in applications if a.stage == ApplicationStage.INTERVIEW_SCHEDULED]

    if saved:
        steps.immediate.append(f"Apply to {min(MAX_APPLY_SUGGESTION, len(saved))} saved jobs")

    if scheduled:
        steps.immediate.append(f"Prepare for {len(scheduled)} upcoming interview(s)")

    if completed:
        steps.follow_up.append(f"Follow up on {len(completed)} completed interview(s)")

    if resume is None or resume.ats_score < 70:
        steps.preparation.append("Improve resume ATS score")

    keywords = [kw for analysis in jd_analyses.values() for kw in analysis.keywords_for_resume][:MAX_FOCUS_KEYWORDS]
    if keywords:
        steps.preparation.append(f"Focus on these keywords: {', '.join(keywords)}")

    return steps


def _health_status(health: float):
    for upper, status, analysis in HEALTH_STATUSES:
        if health < upper:
            return status, analysis
    return TOP_HEALTH_STATUS


def calculate_pipeline_health(
    applications: Iterable[Application], now: Optional[datetime] = None
) -> PipelineHealth:
    """
    Score the pipeline 0-100.

    Base 50; +5 per in-progress application (at most +20); +10 per offer;
    -20 if over half the applications were rejected, else -10 if over 30%;
    -15 if nothing was sent within the recent window (default 7 days).
    """
    moment = now or current_time()
    applications = list(applications)
    health = HEALTH_BASE

    in_progress = sum(
        1 for a in applications if a.stage not in (ApplicationStage.SAVED, ApplicationStage.REJECTED)
    )
    health += min(MAX_IN_PROGRESS_BONUS, in_progress * HEALTH_PER_IN_PROGRESS)

    offers = sum(1 for a in applications if a.stage == ApplicationStage.OFFER)
    health += offers * HEALTH_PER_OFFER

    rejections = sum(1 for a in applications if a.stage == ApplicationStage.REJECTED)
    rejection_rate = rejections / len(applications) * 100 if applications else 0
    if rejection_rate > 50:
        health -= 20
    elif rejection_rate > 30:
        health -= 10

    cutoff = moment - timedelta(days=get_settings().pipeline.recent_days)
    if not any(a.applied_date and a.applied_date > cutoff for a in applications):
        health -= 15

    health = int(clamp(health))
    status, analysis = _health_status(health)
    return PipelineHealth(health=health, status=status, analysis=analysis)
