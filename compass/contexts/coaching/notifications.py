"""
Behavior-driven notifications, nudges and intervention alerts.

generate_contextual_notifications() evaluates five independent conditions
against the user state; each one that holds yields exactly one notification.
Nudges and intervention alerts are plain advisory strings built from similar
threshold ladders.
"""

from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from compass.contexts.coaching.logger import _log_debug
from compass.contexts.coaching.readiness import skill_gap_counts
from compass.contexts.tracking.user_state import (
    Notification,
    NotificationType,
    PlacementUser,
    ReadinessScoreBreakdown,
)
from compass.utils.settings import get_settings
from compass.utils.text_processing import contains_casefold, non_blank, round_half_up
from compass.utils.timestamp import days_between, hours_between
from compass.utils.timestamp import now as current_time

LOW_RESUME_SCORE = 70
LOW_ALIGNMENT_RATIO = 0.5
INTERVIEW_REMINDER_HOURS = 24
INACTIVITY_NOTIFY_DAYS = 3

CRITICAL_RESUME_SCORE = 50
SAVED_JOBS_BEFORE_ALERT = 3
MAX_SKILL_GAPS = 8
INACTIVITY_ALERT_DAYS = 7

NOTIFICATION_TITLES = {
    NotificationType.NEW_JOB_MATCH: "New Job Matches",
    NotificationType.LOW_RESUME_SCORE: "Resume Score Alert",
    NotificationType.JD_ANALYZED_NO_ALIGNMENT: "Skill Alignment Issue",
    NotificationType.INTERVIEW_REMINDER: "Upcoming Interview",
    NotificationType.INACTIVITY_ALERT: "Stay Active",
}

# Lower rank = more urgent
NOTIFICATION_PRIORITY = {
    NotificationType.INTERVIEW_REMINDER: 1,
    NotificationType.LOW_RESUME_SCORE: 2,
    NotificationType.JD_ANALYZED_NO_ALIGNMENT: 3,
    NotificationType.INACTIVITY_ALERT: 4,
    NotificationType.NEW_JOB_MATCH: 5,
}
UNKNOWN_PRIORITY = 999

# (upper bound, nudges); scores at or above the last bound get TOP_NUDGES
READINESS_NUDGES = [
    (30, ["Start by uploading or creating your first resume", "Save 5-10 job postings that match your target role"]),
    (50, ["Analyze your saved jobs to identify missing skills", "Update your resume based on job requirements"]),
    (70, ["Start applying to 3-5 strong job matches", "Practice mock interviews to prepare"]),
    (85, ["Close gaps in specialized skills", "Maintain consistent applications and interviews"]),
]
TOP_NUDGES = ["You're ready! Keep applying and practicing", "Help others in your network"]


def _days_idle(user: PlacementUser, moment: datetime) -> float:
    return days_between(user.last_activity, moment)


def generate_contextual_notifications(user: PlacementUser, now: Optional[datetime] = None) -> List[Notification]:
    """
    Notifications warranted by the user's current state.

    Conditions (each independent):
        1. More high-match jobs than applications -> new_job_match
        2. Current resume ATS score under 70 -> low_resume_score
        3. Analyzed jobs where under half the required skills are covered by
           resume skills -> jd_analyzed_no_alignment (one aggregated notification)
        4. An interview within the next 24 hours -> interview_reminder
        5. Three or more days since last activity -> inactivity_alert

    Args:
        user: Current user state
        now: Reference time (defaults to the current time)

    Returns:
        Unread notifications, in condition order
    """
    moment = now or current_time()
    threshold = get_settings().notifications.high_match_threshold
    messages = []

    high_match_jobs = [job for job in user.job_matches if job.match_score >= threshold]
    if len(high_match_jobs) > len(user.applications):
        messages.append(
            (
                NotificationType.NEW_JOB_MATCH,
                f"{len(high_match_jobs)} high-match jobs ({threshold}%+) found. Start applying!",
            )
        )

    resume = user.current_resume
    if resume is not None and resume.ats_score < LOW_RESUME_SCORE:
        messages.append(
            (
                NotificationType.LOW_RESUME_SCORE,
                f"Your resume ATS score is {resume.ats_score}%. Improve it to increase interview chances",
            )
        )

    resume_skills = non_blank(user.resume_skills)
    matched_job_ids = {job.id for job in user.job_matches}
    low_alignment = []
    for analysis in user.jd_analyses.values():
        # Only analyses of jobs still among the matches count
        if analysis.job_id not in matched_job_ids:
            continue
        aligned = sum(
            1 for skill in resume_skills if any(contains_casefold(skill, req) for req in analysis.required_skills)
        )
        if aligned < len(analysis.required_skills) * LOW_ALIGNMENT_RATIO:
            low_alignment.append(analysis)
    if low_alignment:
        messages.append(
            (
                NotificationType.JD_ANALYZED_NO_ALIGNMENT,
                f"{len(low_alignment)} analyzed jobs have low resume alignment. Consider learning key skills",
            )
        )

    upcoming = [
        app
        for app in user.applications
        if app.interview_date and 0 < hours_between(moment, app.interview_date) <= INTERVIEW_REMINDER_HOURS
    ]
    if upcoming:
        messages.append(
            (
                NotificationType.INTERVIEW_REMINDER,
                f"You have {len(upcoming)} interview(s) in the next 24 hours. Time to prepare!",
            )
        )

    days_idle = _days_idle(user, moment)
    if days_idle >= INACTIVITY_NOTIFY_DAYS:
        messages.append(
            (
                NotificationType.INACTIVITY_ALERT,
                f"No activity for {round_half_up(days_idle)} days. "
                "Apply to new jobs or practice to stay on track",
            )
        )

    stamp = int(moment.timestamp() * 1000)
    notifications = [
        Notification(
            id=f"notif-{stamp}-{index}",
            type=notification_type,
            title=NOTIFICATION_TITLES[notification_type],
            message=message,
            read=False,
            created_at=moment,
        )
        for index, (notification_type, message) in enumerate(messages)
    ]
    _log_debug(f"Generated {len(notifications)} notifications for {user.id}")
    return notifications


def should_notify(user: PlacementUser, now: Optional[datetime] = None, window_minutes: Optional[int] = None) -> bool:
    """
    True if notifications are enabled and now is within the delivery window
    (default plus or minus 120 minutes) around the preferred time of day.

    The preferred time is taken on now's date; a malformed "HH:MM" disables delivery.
    """
    if not user.preferences.notifications_enabled:
        return False

    moment = now or current_time()
    if window_minutes is None:
        window_minutes = get_settings().notifications.window_minutes

    try:
        hours, minutes = (int(part) for part in user.preferences.notification_time.split(":")[:2])
        preferred = moment.replace(hour=hours, minute=minutes, second=0, microsecond=0)
    except ValueError:
        _log_debug(f"Ignoring malformed notification time {user.preferences.notification_time!r}")
        return False

    difference = abs((moment - preferred).total_seconds()) / 60
    return difference <= window_minutes


def prioritize_notifications(notifications: Iterable[Notification]) -> List[Notification]:
    """New list, most urgent first; equal ranks keep their order."""
    return sorted(notifications, key=lambda n: NOTIFICATION_PRIORITY.get(n.type, UNKNOWN_PRIORITY))


def generate_nudges(user: PlacementUser, breakdown: Optional[ReadinessScoreBreakdown] = None) -> List[str]:
    """Two nudges for the readiness bucket (default: stored readiness), plus first-step nudges."""
    score = (breakdown or user.readiness_score).overall_score

    nudges = next((list(items) for upper, items in READINESS_NUDGES if score < upper), list(TOP_NUDGES))

    if not user.applications:
        nudges.append("Apply to your first job today")

    if not any(p.solved for p in user.practice_problems):
        nudges.append("Solve your first practice problem")

    return nudges


def identify_missing_skills(user: PlacementUser) -> List[str]:
    """Skills missing from the resume that more than one analyzed job requires, most frequent first."""
    return [skill for skill, count in skill_gap_counts(user).items() if count > 1]


def get_intervention_alerts(user: PlacementUser, now: Optional[datetime] = None) -> List[str]:
    """Alerts for states that need the user's attention right away."""
    moment = now or current_time()
    alerts = []

    resume = user.current_resume
    if resume is None or resume.ats_score < CRITICAL_RESUME_SCORE:
        alerts.append("CRITICAL: Resume needs urgent improvements")

    if not user.applications and len(user.saved_jobs) > SAVED_JOBS_BEFORE_ALERT:
        alerts.append("You've saved jobs but haven't applied - start applying now")

    missing_skills = identify_missing_skills(user)
    if len(missing_skills) > MAX_SKILL_GAPS:
        alerts.append(f"WARNING: {len(missing_skills)} critical skills gaps identified")

    days_idle = _days_idle(user, moment)
    if days_idle > INACTIVITY_ALERT_DAYS:
        alerts.append(f"No activity for {round_half_up(days_idle)} days - stay active")

    return alerts


def clear_old_notifications(
    notifications: Iterable[Notification], days_old: Optional[float] = None, now: Optional[datetime] = None
) -> List[Notification]:
    """Notifications created after the cutoff (default: retention_days before now)."""
    moment = now or current_time()
    if days_old is None:
        days_old = get_settings().notifications.retention_days

    cutoff = moment - timedelta(days=days_old)
    return [n for n in notifications if n.created_at > cutoff]
