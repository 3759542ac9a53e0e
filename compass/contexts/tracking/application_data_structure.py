"""
Application pipeline and practice data structures for the Tracking context.

Applications move through a fixed pipeline of stages. The progression is
linear with offer/rejected as terminal, but nothing enforces it: any stage may
be assigned directly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from compass.contexts.intake.job_data_structure import Difficulty
from compass.utils.records import (
    enum_value,
    isoformat_or_none,
    optional_datetime,
    require,
)


class ApplicationStage(str, Enum):
    SAVED = "saved"
    APPLIED = "applied"
    INTERVIEW_SCHEDULED = "interview_scheduled"
    INTERVIEW_COMPLETED = "interview_completed"
    OFFER = "offer"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STAGES


TERMINAL_STAGES = frozenset({ApplicationStage.OFFER, ApplicationStage.REJECTED})


class InterviewType(str, Enum):
    PHONE = "phone"
    TECHNICAL = "technical"
    HR = "hr"
    FINAL = "final"


class MockInterviewType(str, Enum):
    TECHNICAL = "technical"
    BEHAVIORAL = "behavioral"
    HR = "hr"


@dataclass
class ApplicationDocuments:
    """Ids/paths of the documents sent with an application."""

    resume: str = ""
    cover_letter: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ApplicationDocuments":
        data = data or {}
        return cls(resume=str(data.get("resume") or ""), cover_letter=data.get("cover_letter"))

    def to_dict(self) -> Dict[str, Any]:
        return {"resume": self.resume, "cover_letter": self.cover_letter}


@dataclass
class Application:
    """
    One job application.

    Attributes:
        id: Application identifier
        job_id: Job applied to
        resume_id: Resume used
        stage: Current pipeline stage
        applied_date: When the application was sent (None for never-sent saved entries)
        interview_date: Scheduled interview, if any
        interview_type: Kind of interview
        interview_rating: Self-assessed interview rating (0-10)
        notes: Free-form notes
        documents: Documents sent
    """

    id: str
    job_id: str
    resume_id: str = ""
    stage: ApplicationStage = ApplicationStage.SAVED
    applied_date: Optional[datetime] = None
    interview_date: Optional[datetime] = None
    interview_type: Optional[InterviewType] = None
    interview_rating: Optional[float] = None
    notes: str = ""
    documents: ApplicationDocuments = field(default_factory=ApplicationDocuments)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Application":
        interview_type = data.get("interview_type")
        rating = data.get("interview_rating")
        return cls(
            id=str(require(data, "id", "Application")),
            job_id=str(require(data, "job_id", "Application")),
            resume_id=str(data.get("resume_id") or ""),
            stage=enum_value(ApplicationStage, data.get("stage", "saved"), "Application", "stage"),
            applied_date=optional_datetime(data, "applied_date", "Application"),
            interview_date=optional_datetime(data, "interview_date", "Application"),
            interview_type=(
                enum_value(InterviewType, interview_type, "Application", "interview_type")
                if interview_type
                else None
            ),
            interview_rating=float(rating) if rating is not None else None,
            notes=data.get("notes") or "",
            documents=ApplicationDocuments.from_dict(data.get("documents")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "job_id": self.job_id,
            "resume_id": self.resume_id,
            "stage": self.stage.value,
            "applied_date": isoformat_or_none(self.applied_date),
            "interview_date": isoformat_or_none(self.interview_date),
            "interview_type": self.interview_type.value if self.interview_type else None,
            "interview_rating": self.interview_rating,
            "notes": self.notes,
            "documents": self.documents.to_dict(),
        }


@dataclass
class PracticeProblem:
    id: str
    title: str
    description: str = ""
    difficulty: Difficulty = Difficulty.EASY
    category: str = ""
    solved: bool = False
    attempts: int = 0
    last_attempt: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PracticeProblem":
        return cls(
            id=str(require(data, "id", "PracticeProblem")),
            title=str(require(data, "title", "PracticeProblem")),
            description=data.get("description") or "",
            difficulty=enum_value(Difficulty, data.get("difficulty", "Easy"), "PracticeProblem", "difficulty"),
            category=data.get("category") or "",
            solved=bool(data.get("solved", False)),
            attempts=int(data.get("attempts") or 0),
            last_attempt=optional_datetime(data, "last_attempt", "PracticeProblem"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "difficulty": self.difficulty.value,
            "category": self.category,
            "solved": self.solved,
            "attempts": self.attempts,
            "last_attempt": isoformat_or_none(self.last_attempt),
        }


@dataclass
class MockInterview:
    id: str
    title: str
    type: MockInterviewType = MockInterviewType.TECHNICAL
    duration: int = 0  # minutes
    completed: bool = False
    rating: Optional[float] = None
    feedback: str = ""
    date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MockInterview":
        rating = data.get("rating")
        return cls(
            id=str(require(data, "id", "MockInterview")),
            title=str(require(data, "title", "MockInterview")),
            type=enum_value(MockInterviewType, data.get("type", "technical"), "MockInterview", "type"),
            duration=int(data.get("duration") or 0),
            completed=bool(data.get("completed", False)),
            rating=float(rating) if rating is not None else None,
            feedback=data.get("feedback") or "",
            date=optional_datetime(data, "date", "MockInterview"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "duration": self.duration,
            "completed": self.completed,
            "rating": self.rating,
            "feedback": self.feedback,
            "date": isoformat_or_none(self.date),
        }
