"""
The caller-owned user record.

PlacementUser holds everything the scoring contexts read: profile, preferences,
resumes, job matches, applications, JD analyses, practice data and
notifications. It is a value: every command method returns a NEW PlacementUser
(with updated_at stamped) and leaves the original untouched.

Example:
    user = PlacementUser(id="u1", name="Ada", email="ada@example.com")
    saved = user.add_job(job).save_job(job.id)
    # saved.saved_jobs == [job with saved=True]; user.saved_jobs is still []
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from omegaconf import OmegaConf

from compass.contexts.intake.job_data_structure import JDAnalysis, Job
from compass.contexts.templating.resume_data_structure import ResumeDocument
from compass.contexts.tracking.application_data_structure import (
    Application,
    ApplicationStage,
    MockInterview,
    PracticeProblem,
)
from compass.utils.records import (
    InvalidRecordError,
    enum_value,
    isoformat_or_none,
    optional_datetime,
    require,
)
from compass.utils.text_processing import clamp, round_half_up
from compass.utils.timestamp import now as current_time

# Readiness sub-score weights (sum to 1.0)
READINESS_WEIGHTS = {
    "job_match_quality": 0.30,
    "jd_skill_alignment": 0.25,
    "resume_ats_score": 0.25,
    "application_progress": 0.10,
    "practice_completion": 0.10,
}


@dataclass
class ReadinessScoreBreakdown:
    """
    Five 0-100 sub-scores and their weighted, rounded and clamped sum.

    Build with from_components() so that overall_score always matches the
    sub-scores.
    """

    job_match_quality: float = 0
    jd_skill_alignment: float = 0
    resume_ats_score: float = 0
    application_progress: float = 0
    practice_completion: float = 0
    overall_score: int = 0

    @classmethod
    def from_components(
        cls,
        job_match_quality: float,
        jd_skill_alignment: float,
        resume_ats_score: float,
        application_progress: float,
        practice_completion: float,
    ) -> "ReadinessScoreBreakdown":
        components = {
            "job_match_quality": job_match_quality,
            "jd_skill_alignment": jd_skill_alignment,
            "resume_ats_score": resume_ats_score,
            "application_progress": application_progress,
            "practice_completion": practice_completion,
        }
        weighted = sum(value * READINESS_WEIGHTS[name] for name, value in components.items())
        return cls(**components, overall_score=int(clamp(round_half_up(weighted))))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ReadinessScoreBreakdown":
        """Rebuild from stored sub-scores; the overall score is recomputed."""
        data = data or {}
        return cls.from_components(**{name: float(data.get(name) or 0) for name in READINESS_WEIGHTS})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_match_quality": self.job_match_quality,
            "jd_skill_alignment": self.jd_skill_alignment,
            "resume_ats_score": self.resume_ats_score,
            "application_progress": self.application_progress,
            "practice_completion": self.practice_completion,
            "overall_score": self.overall_score,
        }


class NotificationType(str, Enum):
    NEW_JOB_MATCH = "new_job_match"
    LOW_RESUME_SCORE = "low_resume_score"
    JD_ANALYZED_NO_ALIGNMENT = "jd_analyzed_no_alignment"
    INTERVIEW_REMINDER = "interview_reminder"
    INACTIVITY_ALERT = "inactivity_alert"


@dataclass
class Notification:
    id: str
    type: NotificationType
    title: str
    message: str
    action_url: str = ""
    read: bool = False
    created_at: datetime = field(default_factory=current_time)
    triggered_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Notification":
        return cls(
            id=str(require(data, "id", "Notification")),
            type=enum_value(NotificationType, require(data, "type", "Notification"), "Notification", "type"),
            title=str(data.get("title") or ""),
            message=str(data.get("message") or ""),
            action_url=data.get("action_url") or "",
            read=bool(data.get("read", False)),
            created_at=optional_datetime(data, "created_at", "Notification") or current_time(),
            triggered_at=optional_datetime(data, "triggered_at", "Notification"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "action_url": self.action_url,
            "read": self.read,
            "created_at": self.created_at.isoformat(),
            "triggered_at": isoformat_or_none(self.triggered_at),
        }


@dataclass
class UserPreferences:
    """
    Job search and notification preferences.

    notification_time is the preferred delivery time of day, "HH:MM".
    """

    job_categories: List[str] = field(default_factory=list)
    experience_level: str = ""
    salary_min: int = 0
    salary_max: int = 0
    locations: List[str] = field(default_factory=list)
    notifications_enabled: bool = True
    notification_time: str = "09:00"

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "UserPreferences":
        data = data or {}
        salary = data.get("salary_range") or {}
        return cls(
            job_categories=list(data.get("job_categories") or []),
            experience_level=data.get("experience_level") or "",
            salary_min=int(salary.get("min") or 0),
            salary_max=int(salary.get("max") or 0),
            locations=list(data.get("locations") or []),
            notifications_enabled=bool(data.get("notifications_enabled", True)),
            notification_time=str(data.get("notification_time") or "09:00"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "job_categories": list(self.job_categories),
            "experience_level": self.experience_level,
            "salary_range": {"min": self.salary_min, "max": self.salary_max},
            "locations": list(self.locations),
            "notifications_enabled": self.notifications_enabled,
            "notification_time": self.notification_time,
        }


@dataclass
class PlacementUser:
    """
    Complete state of one candidate.

    Attributes:
        id, name, email, phone: Profile
        target_role: Role the candidate is aiming for
        target_companies: Companies the candidate prefers
        current_level: fresher / junior / mid / senior
        preferences: Search and notification preferences
        resumes: All resumes
        current_resume_id: Resume used for scoring (None = no resume selected)
        job_matches: Every job the candidate has seen
        saved_jobs: Jobs the candidate saved
        applications: Application pipeline
        jd_analyses: JD analyses keyed by job id
        readiness_score: Last stored readiness breakdown
        practice_problems: Coding practice problems
        mock_interviews: Mock interview sessions
        notifications: Delivered notifications
        last_activity: Last time the candidate did anything
    """

    id: str
    name: str
    email: str
    phone: str = ""
    target_role: str = ""
    target_companies: List[str] = field(default_factory=list)
    current_level: str = "fresher"
    preferences: UserPreferences = field(default_factory=UserPreferences)
    resumes: List[ResumeDocument] = field(default_factory=list)
    current_resume_id: Optional[str] = None
    job_matches: List[Job] = field(default_factory=list)
    saved_jobs: List[Job] = field(default_factory=list)
    applications: List[Application] = field(default_factory=list)
    jd_analyses: Dict[str, JDAnalysis] = field(default_factory=dict)
    readiness_score: ReadinessScoreBreakdown = field(default_factory=ReadinessScoreBreakdown)
    practice_problems: List[PracticeProblem] = field(default_factory=list)
    mock_interviews: List[MockInterview] = field(default_factory=list)
    notifications: List[Notification] = field(default_factory=list)
    last_activity: datetime = field(default_factory=current_time)
    created_at: datetime = field(default_factory=current_time)
    updated_at: datetime = field(default_factory=current_time)

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def current_resume(self) -> Optional[ResumeDocument]:
        if not self.current_resume_id:
            return None
        return self.get_resume(self.current_resume_id)

    def get_resume(self, resume_id: str) -> Optional[ResumeDocument]:
        return next((r for r in self.resumes if r.id == resume_id), None)

    @property
    def resume_skills(self) -> List[str]:
        """Skills of the current resume (empty without one)."""
        resume = self.current_resume
        return resume.skills if resume else []

    @property
    def unread_notifications(self) -> List[Notification]:
        return [n for n in self.notifications if not n.read]

    def get_job(self, job_id: str) -> Optional[Job]:
        return next((j for j in self.job_matches if j.id == job_id), None)

    def get_application(self, application_id: str) -> Optional[Application]:
        return next((a for a in self.applications if a.id == application_id), None)

    def get_jd_analysis(self, job_id: str) -> Optional[JDAnalysis]:
        return self.jd_analyses.get(job_id)

    def applications_by_stage(self, stage: Union[ApplicationStage, str]) -> List[Application]:
        stage = enum_value(ApplicationStage, stage, "Application", "stage")
        return [a for a in self.applications if a.stage == stage]

    # =========================================================================
    # COMMANDS (each returns a new PlacementUser)
    # =========================================================================

    def _changed(self, now: Optional[datetime] = None, **changes) -> "PlacementUser":
        return replace(self, updated_at=now or current_time(), **changes)

    def add_job(self, job: Job, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(now, job_matches=[*self.job_matches, job])

    def save_job(self, job_id: str, now: Optional[datetime] = None) -> "PlacementUser":
        """
        Mark a known job as saved. Unknown ids leave the user unchanged, and a
        job that is already saved is not saved twice.
        """
        job = self.get_job(job_id)
        if job is None:
            return self

        saved_job = replace(job, saved=True)
        saved_jobs = list(self.saved_jobs)
        if not any(j.id == job_id for j in saved_jobs):
            saved_jobs.append(saved_job)

        return self._changed(
            now,
            saved_jobs=saved_jobs,
            job_matches=[saved_job if j.id == job_id else j for j in self.job_matches],
        )

    def unsave_job(self, job_id: str, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(
            now,
            saved_jobs=[j for j in self.saved_jobs if j.id != job_id],
            job_matches=[replace(j, saved=False) if j.id == job_id else j for j in self.job_matches],
        )

    def update_job_match_score(self, job_id: str, score: int, now: Optional[datetime] = None) -> "PlacementUser":
        """Set a job's match score (clamped to 0-100) in both job_matches and saved_jobs."""

        def rescore(jobs: List[Job]) -> List[Job]:
            return [replace(j, match_score=int(clamp(score))) if j.id == job_id else j for j in jobs]

        return self._changed(now, job_matches=rescore(self.job_matches), saved_jobs=rescore(self.saved_jobs))

    def add_resume(self, resume: ResumeDocument, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(now, resumes=[*self.resumes, resume])

    def put_resume(self, resume: ResumeDocument, now: Optional[datetime] = None) -> "PlacementUser":
        """Add a resume, or replace the one stored under the same id in place."""
        if self.get_resume(resume.id) is None:
            return self.add_resume(resume, now=now)
        return self._changed(now, resumes=[resume if r.id == resume.id else r for r in self.resumes])

    def update_resume(self, resume_id: str, now: Optional[datetime] = None, **changes) -> "PlacementUser":
        """Apply field changes (e.g., sections=..., theme=...) to one resume."""
        return self._changed(
            now, resumes=[replace(r, **changes) if r.id == resume_id else r for r in self.resumes]
        )

    def set_current_resume(self, resume_id: str, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(now, current_resume_id=resume_id)

    def update_ats_score(self, resume_id: str, score: int, now: Optional[datetime] = None) -> "PlacementUser":
        return self.update_resume(resume_id, now=now, ats_score=int(clamp(score)))

    def add_jd_analysis(self, analysis: JDAnalysis, now: Optional[datetime] = None) -> "PlacementUser":
        """Store an analysis under its job id (replacing any earlier one)."""
        if not analysis.job_id:
            raise InvalidRecordError("Analysis has no job_id to be stored under", "JDAnalysis", "job_id")
        return self._changed(now, jd_analyses={**self.jd_analyses, analysis.job_id: analysis})

    def update_jd_analysis(self, job_id: str, now: Optional[datetime] = None, **changes) -> "PlacementUser":
        """Apply field changes to a stored analysis. Unknown job ids leave the user unchanged."""
        analysis = self.jd_analyses.get(job_id)
        if analysis is None:
            return self
        return self._changed(now, jd_analyses={**self.jd_analyses, job_id: replace(analysis, **changes)})

    def add_application(self, application: Application, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(now, applications=[*self.applications, application])

    def update_application_stage(
        self, application_id: str, stage: Union[ApplicationStage, str], now: Optional[datetime] = None
    ) -> "PlacementUser":
        """Set any stage directly; transitions are not validated."""
        stage = enum_value(ApplicationStage, stage, "Application", "stage")
        return self._changed(
            now,
            applications=[
                replace(a, stage=stage) if a.id == application_id else a for a in self.applications
            ],
        )

    def update_readiness_score(
        self, breakdown: ReadinessScoreBreakdown, now: Optional[datetime] = None
    ) -> "PlacementUser":
        return self._changed(now, readiness_score=breakdown)

    def add_notification(self, notification: Notification, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(now, notifications=[*self.notifications, notification])

    def mark_notification_as_read(self, notification_id: str, now: Optional[datetime] = None) -> "PlacementUser":
        return self._changed(
            now,
            notifications=[
                replace(n, read=True) if n.id == notification_id else n for n in self.notifications
            ],
        )

    def touch(self, now: Optional[datetime] = None) -> "PlacementUser":
        """Record activity now."""
        moment = now or current_time()
        return self._changed(moment, last_activity=moment)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlacementUser":
        """
        Build a user from a plain mapping.

        jd_analyses may be a mapping keyed by job id or a list of analyses
        carrying their own job_id.

        Raises:
            InvalidRecordError: Missing required fields or unparsable values
            InvalidResumeStructureError: Malformed resume
        """
        if not isinstance(data, Mapping):
            raise InvalidRecordError(f"Expected a mapping, got {type(data).__name__}", "PlacementUser")

        raw_analyses = data.get("jd_analyses") or {}
        if isinstance(raw_analyses, Mapping):
            analyses = {}
            for job_id, raw in raw_analyses.items():
                analysis = JDAnalysis.from_dict(raw)
                analyses[str(job_id)] = analysis if analysis.job_id else analysis.for_job(str(job_id))
        else:
            analyses = {}
            for raw in raw_analyses:
                analysis = JDAnalysis.from_dict(raw)
                if not analysis.job_id:
                    raise InvalidRecordError("Listed analysis has no job_id", "JDAnalysis", "job_id")
                analyses[analysis.job_id] = analysis

        created_at = optional_datetime(data, "created_at", "PlacementUser") or current_time()
        return cls(
            id=str(require(data, "id", "PlacementUser")),
            name=str(require(data, "name", "PlacementUser")),
            email=str(data.get("email") or ""),
            phone=data.get("phone") or "",
            target_role=data.get("target_role") or "",
            target_companies=list(data.get("target_companies") or []),
            current_level=data.get("current_level") or "fresher",
            preferences=UserPreferences.from_dict(data.get("preferences")),
            resumes=[ResumeDocument.from_dict(r) for r in data.get("resumes") or []],
            current_resume_id=data.get("current_resume_id"),
            job_matches=[Job.from_dict(j) for j in data.get("job_matches") or []],
            saved_jobs=[Job.from_dict(j) for j in data.get("saved_jobs") or []],
            applications=[Application.from_dict(a) for a in data.get("applications") or []],
            jd_analyses=analyses,
            readiness_score=ReadinessScoreBreakdown.from_dict(data.get("readiness_score")),
            practice_problems=[PracticeProblem.from_dict(p) for p in data.get("practice_problems") or []],
            mock_interviews=[MockInterview.from_dict(m) for m in data.get("mock_interviews") or []],
            notifications=[Notification.from_dict(n) for n in data.get("notifications") or []],
            last_activity=optional_datetime(data, "last_activity", "PlacementUser") or created_at,
            created_at=created_at,
            updated_at=optional_datetime(data, "updated_at", "PlacementUser") or created_at,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "PlacementUser":
        """Load a user from YAML (the mapping itself, or nested under 'user')."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        yaml_dict = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if isinstance(yaml_dict, dict) and "user" in yaml_dict:
            yaml_dict = yaml_dict["user"]
        return cls.from_dict(yaml_dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "target_role": self.target_role,
            "target_companies": list(self.target_companies),
            "current_level": self.current_level,
            "preferences": self.preferences.to_dict(),
            "resumes": [r.to_dict() for r in self.resumes],
            "current_resume_id": self.current_resume_id,
            "job_matches": [j.to_dict() for j in self.job_matches],
            "saved_jobs": [j.to_dict() for j in self.saved_jobs],
            "applications": [a.to_dict() for a in self.applications],
            "jd_analyses": {job_id: a.to_dict() for job_id, a in self.jd_analyses.items()},
            "readiness_score": self.readiness_score.to_dict(),
            "practice_problems": [p.to_dict() for p in self.practice_problems],
            "mock_interviews": [m.to_dict() for m in self.mock_interviews],
            "notifications": [n.to_dict() for n in self.notifications],
            "last_activity": self.last_activity.isoformat(),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
