"""
Tracking Context

Responsibilities:
- Holds the application pipeline, practice problems and mock interviews
- Owns the caller-owned user record (PlacementUser) and its commands
- Stores readiness breakdowns and notifications produced by coaching

Owns: Application/practice records, PlacementUser state transitions
Never: Computes scores itself (coaching and orchestration do)
"""

from compass.contexts.tracking.application_data_structure import (
    Application,
    ApplicationDocuments,
    ApplicationStage,
    InterviewType,
    MockInterview,
    MockInterviewType,
    PracticeProblem,
    TERMINAL_STAGES,
)
from compass.contexts.tracking.user_state import (
    READINESS_WEIGHTS,
    Notification,
    NotificationType,
    PlacementUser,
    ReadinessScoreBreakdown,
    UserPreferences,
)

__all__ = [
    # Pipeline
    "Application",
    "ApplicationDocuments",
    "ApplicationStage",
    "InterviewType",
    "TERMINAL_STAGES",
    # Practice
    "PracticeProblem",
    "MockInterview",
    "MockInterviewType",
    # User state
    "PlacementUser",
    "UserPreferences",
    "ReadinessScoreBreakdown",
    "READINESS_WEIGHTS",
    "Notification",
    "NotificationType",
]
