"""
Coaching Context

Responsibilities:
- Aggregates job match, skill alignment, ATS, pipeline and practice metrics
  into one readiness score
- Recommends the next action and produces readiness reports
- Generates contextual notifications, nudges and intervention alerts

Owns: Readiness weights, recommendation ladders, notification rules
Never: Modifies resumes or job data
"""

from compass.contexts.coaching.notifications import (
    clear_old_notifications,
    generate_contextual_notifications,
    generate_nudges,
    get_intervention_alerts,
    identify_missing_skills,
    prioritize_notifications,
    should_notify,
)
from compass.contexts.coaching.readiness import (
    DashboardSummary,
    PipelineCounts,
    ReadinessReport,
    build_dashboard_summary,
    calculate_readiness_score,
    generate_readiness_report,
    get_next_action_recommendation,
    get_weak_skill_alerts,
)

__all__ = [
    # Readiness
    "calculate_readiness_score",
    "get_weak_skill_alerts",
    "get_next_action_recommendation",
    "generate_readiness_report",
    "build_dashboard_summary",
    "ReadinessReport",
    "DashboardSummary",
    "PipelineCounts",
    # Notifications
    "generate_contextual_notifications",
    "should_notify",
    "prioritize_notifications",
    "generate_nudges",
    "get_intervention_alerts",
    "identify_missing_skills",
    "clear_old_notifications",
]
