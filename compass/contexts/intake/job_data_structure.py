"""
Job listing and job-description analysis data structures for the Intake context.

Job records arrive from an external feed (or fixtures); JDAnalysis is derived from
a job's free-text description by the JD analyzer and is keyed by job id.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from compass.utils.records import (
    InvalidRecordError,
    enum_value,
    isoformat_or_none,
    optional_datetime,
    require,
)
from compass.utils.text_processing import clamp
from compass.utils.timestamp import now


class Difficulty(str, Enum):
    """Difficulty rating of a job description."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass
class SalaryRange:
    """Advertised salary band."""

    min: int
    max: int
    currency: str = "USD"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SalaryRange":
        low = require(data, "min", "SalaryRange")
        high = require(data, "max", "SalaryRange")
        try:
            return cls(min=int(low), max=int(high), currency=data.get("currency", "USD"))
        except (TypeError, ValueError) as e:
            raise InvalidRecordError(f"Salary bounds must be integers: {e}", "SalaryRange") from e

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "currency": self.currency}


@dataclass
class Job:
    """
    A job listing from the feed.

    match_score (0-100) is the only field COMPASS itself writes (see
    targeting.job_matcher.score_job).
    """

    id: str
    title: str
    company: str
    location: str = ""
    description: str = ""
    requirements: List[str] = field(default_factory=list)
    salary: Optional[SalaryRange] = None
    job_url: str = ""
    posted_date: Optional[datetime] = None
    applied_date: Optional[datetime] = None
    saved: bool = False
    match_score: int = 0
    source: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Job":
        """Build a Job from a plain mapping (snake_case keys)."""
        salary = data.get("salary")
        return cls(
            id=str(require(data, "id", "Job")),
            title=str(require(data, "title", "Job")),
            company=str(require(data, "company", "Job")),
            location=data.get("location") or "",
            description=data.get("description") or "",
            requirements=[str(r) for r in data.get("requirements") or []],
            salary=SalaryRange.from_dict(salary) if salary else None,
            job_url=data.get("job_url") or "",
            posted_date=optional_datetime(data, "posted_date", "Job"),
            applied_date=optional_datetime(data, "applied_date", "Job"),
            saved=bool(data.get("saved", False)),
            match_score=clamp(int(data.get("match_score") or 0)),
            source=data.get("source") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "requirements": list(self.requirements),
            "salary": self.salary.to_dict() if self.salary else None,
            "job_url": self.job_url,
            "posted_date": isoformat_or_none(self.posted_date),
            "applied_date": isoformat_or_none(self.applied_date),
            "saved": self.saved,
            "match_score": self.match_score,
            "source": self.source,
        }


@dataclass
class JDAnalysis:
    """
    Structured analysis of one job description.

    Immutable once computed; recompute by analyzing the description again.
    missing_skills is empty until the analysis has been compared with a resume.
    """

    required_skills: List[str] = field(default_factory=list)
    preferred_skills: List[str] = field(default_factory=list)
    experience_required: str = "Not specified"
    responsibilities: List[str] = field(default_factory=list)
    keywords_for_resume: List[str] = field(default_factory=list)
    difficulty_rating: Difficulty = Difficulty.EASY
    estimated_preparation_time: int = 0
    job_id: Optional[str] = None
    missing_skills: List[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    analysis_date: datetime = field(default_factory=now)

    def for_job(self, job_id: str) -> "JDAnalysis":
        """Copy of this analysis keyed to job_id."""
        return replace(self, job_id=job_id)

    def with_missing_skills(self, missing_skills: List[str]) -> "JDAnalysis":
        return replace(self, missing_skills=list(missing_skills))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JDAnalysis":
        if not isinstance(data, Mapping):
            raise InvalidRecordError(f"Expected a mapping, got {type(data).__name__}", "JDAnalysis")
        analysis_date = optional_datetime(data, "analysis_date", "JDAnalysis")
        return cls(
            required_skills=list(data.get("required_skills") or []),
            preferred_skills=list(data.get("preferred_skills") or []),
            experience_required=data.get("experience_required") or "Not specified",
            responsibilities=list(data.get("responsibilities") or []),
            keywords_for_resume=list(data.get("keywords_for_resume") or []),
            difficulty_rating=enum_value(
                Difficulty, data.get("difficulty_rating", "Easy"), "JDAnalysis", "difficulty_rating"
            ),
            estimated_preparation_time=int(data.get("estimated_preparation_time") or 0),
            job_id=data.get("job_id"),
            missing_skills=list(data.get("missing_skills") or []),
            id=str(data.get("id") or uuid.uuid4()),
            analysis_date=analysis_date or now(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "job_id": self.job_id,
            "required_skills": list(self.required_skills),
            "preferred_skills": list(self.preferred_skills),
            "experience_required": self.experience_required,
            "responsibilities": list(self.responsibilities),
            "keywords_for_resume": list(self.keywords_for_resume),
            "difficulty_rating": self.difficulty_rating.value,
            "estimated_preparation_time": self.estimated_preparation_time,
            "missing_skills": list(self.missing_skills),
            "analysis_date": self.analysis_date.isoformat(),
        }
