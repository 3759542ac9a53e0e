"""
Resume Document Structure

Structured representation of a resume for COMPASS. A resume is an ordered list
of typed sections; each section kind carries its own payload:

- PersonalSection: name and contact details
- SummarySection: professional summary paragraph
- ExperienceSection: list of ExperienceEntry
- EducationSection: list of EducationEntry
- SkillsSection: flat list of skill strings
- ProjectsSection: list of ProjectEntry
- CertificationsSection: list of CertificationEntry

On disk (YAML/JSON) every section is {"id", "type", "content"}; content_dict()
renders a section's payload back to that loosely-typed content mapping, which
is also the text the ATS checks measure.
"""

import json
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Type, Union

from omegaconf import OmegaConf

from compass.contexts.templating.exceptions import InvalidResumeStructureError
from compass.utils.records import optional_datetime
from compass.utils.text_processing import clamp
from compass.utils.timestamp import now

SAFE_THEMES = ("blue", "purple")


def _entries(content: Mapping[str, Any], key: str, section_type: str, section_id: str) -> List[Mapping[str, Any]]:
    """List of mapping entries under content[key] (missing key = empty list)."""
    raw = content.get(key) or []
    if not isinstance(raw, (list, tuple)):
        raise InvalidResumeStructureError(f"'{key}' must be a list", section_type, section_id, raw)
    for entry in raw:
        if not isinstance(entry, Mapping):
            raise InvalidResumeStructureError(
                f"Each item in '{key}' must be a mapping", section_type, section_id, entry
            )
    return list(raw)


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _strings(values: Any) -> List[str]:
    return [str(v) for v in values or []]


# =============================================================================
# ENTRIES
# =============================================================================


@dataclass
class ExperienceEntry:
    position: str = ""
    company: str = ""
    duration: str = ""
    achievements: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExperienceEntry":
        return cls(
            position=_text(data.get("position")),
            company=_text(data.get("company")),
            duration=_text(data.get("duration")),
            achievements=_strings(data.get("achievements")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "company": self.company,
            "duration": self.duration,
            "achievements": list(self.achievements),
        }


@dataclass
class EducationEntry:
    degree: str = ""
    institution: str = ""
    year: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EducationEntry":
        return cls(
            degree=_text(data.get("degree")),
            institution=_text(data.get("institution")),
            year=_text(data.get("year")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"degree": self.degree, "institution": self.institution, "year": self.year}


@dataclass
class ProjectEntry:
    name: str = ""
    description: str = ""
    technologies: List[str] = field(default_factory=list)
    link: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ProjectEntry":
        return cls(
            name=_text(data.get("name")),
            description=_text(data.get("description")),
            technologies=_strings(data.get("technologies")),
            link=_text(data.get("link")),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {"name": self.name, "description": self.description, "technologies": list(self.technologies)}
        if self.link:
            result["link"] = self.link
        return result


@dataclass
class CertificationEntry:
    name: str = ""
    issuer: str = ""
    year: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CertificationEntry":
        return cls(name=_text(data.get("name")), issuer=_text(data.get("issuer")), year=_text(data.get("year")))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "issuer": self.issuer, "year": self.year}


# =============================================================================
# SECTIONS
# =============================================================================


@dataclass
class _Section:
    """Common shape of every section variant: an id plus a typed payload."""

    id: str

    section_type: ClassVar[str] = ""

    def content_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.section_type, "content": self.content_dict()}


@dataclass
class PersonalSection(_Section):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""

    section_type: ClassVar[str] = "personal"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "PersonalSection":
        return cls(
            id=section_id,
            name=_text(content.get("name")),
            email=_text(content.get("email")),
            phone=_text(content.get("phone")),
            location=_text(content.get("location")),
        )

    def content_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "email": self.email, "phone": self.phone, "location": self.location}


@dataclass
class SummarySection(_Section):
    summary: str = ""

    section_type: ClassVar[str] = "summary"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "SummarySection":
        return cls(id=section_id, summary=_text(content.get("summary")))

    def content_dict(self) -> Dict[str, Any]:
        return {"summary": self.summary}


@dataclass
class ExperienceSection(_Section):
    experiences: List[ExperienceEntry] = field(default_factory=list)

    section_type: ClassVar[str] = "experience"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "ExperienceSection":
        entries = _entries(content, "experiences", cls.section_type, section_id)
        return cls(id=section_id, experiences=[ExperienceEntry.from_dict(e) for e in entries])

    def content_dict(self) -> Dict[str, Any]:
        return {"experiences": [entry.to_dict() for entry in self.experiences]}


@dataclass
class EducationSection(_Section):
    education: List[EducationEntry] = field(default_factory=list)

    section_type: ClassVar[str] = "education"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "EducationSection":
        entries = _entries(content, "education", cls.section_type, section_id)
        return cls(id=section_id, education=[EducationEntry.from_dict(e) for e in entries])

    def content_dict(self) -> Dict[str, Any]:
        return {"education": [entry.to_dict() for entry in self.education]}


@dataclass
class SkillsSection(_Section):
    skills: List[str] = field(default_factory=list)

    section_type: ClassVar[str] = "skills"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "SkillsSection":
        skills = content.get("skills") or []
        if not isinstance(skills, (list, tuple)):
            raise InvalidResumeStructureError("'skills' must be a list", cls.section_type, section_id, skills)
        return cls(id=section_id, skills=_strings(skills))

    def content_dict(self) -> Dict[str, Any]:
        return {"skills": list(self.skills)}


@dataclass
class ProjectsSection(_Section):
    projects: List[ProjectEntry] = field(default_factory=list)

    section_type: ClassVar[str] = "projects"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "ProjectsSection":
        entries = _entries(content, "projects", cls.section_type, section_id)
        return cls(id=section_id, projects=[ProjectEntry.from_dict(e) for e in entries])

    def content_dict(self) -> Dict[str, Any]:
        return {"projects": [entry.to_dict() for entry in self.projects]}


@dataclass
class CertificationsSection(_Section):
    certifications: List[CertificationEntry] = field(default_factory=list)

    section_type: ClassVar[str] = "certifications"

    @classmethod
    def from_content(cls, section_id: str, content: Mapping[str, Any]) -> "CertificationsSection":
        entries = _entries(content, "certifications", cls.section_type, section_id)
        return cls(id=section_id, certifications=[CertificationEntry.from_dict(e) for e in entries])

    def content_dict(self) -> Dict[str, Any]:
        return {"certifications": [entry.to_dict() for entry in self.certifications]}


ResumeSection = Union[
    PersonalSection,
    SummarySection,
    ExperienceSection,
    EducationSection,
    SkillsSection,
    ProjectsSection,
    CertificationsSection,
]

# section type string -> variant
SECTION_TYPES: Dict[str, Type[_Section]] = {
    cls.section_type: cls
    for cls in (
        PersonalSection,
        SummarySection,
        ExperienceSection,
        EducationSection,
        SkillsSection,
        ProjectsSection,
        CertificationsSection,
    )
}


def section_from_dict(data: Mapping[str, Any]) -> ResumeSection:
    """
    Build the section variant named by data["type"].

    Raises:
        InvalidResumeStructureError: Unknown type, or content that is not a mapping
    """
    if not isinstance(data, Mapping):
        raise InvalidResumeStructureError("Section must be a mapping", content=data)

    section_type = data.get("type")
    section_id = _text(data.get("id"))

    section_cls = SECTION_TYPES.get(section_type)
    if section_cls is None:
        allowed = ", ".join(SECTION_TYPES)
        raise InvalidResumeStructureError(
            f"Unknown section type {section_type!r} (expected one of: {allowed})", section_type, section_id
        )

    content = data.get("content")
    if content is None:
        content = {}
    if not isinstance(content, Mapping):
        raise InvalidResumeStructureError("Section content must be a mapping", section_type, section_id, content)

    return section_cls.from_content(section_id, content)


# =============================================================================
# DOCUMENT
# =============================================================================


@dataclass
class ResumeDocument:
    """
    A resume: ordered typed sections plus presentation settings.

    Sections are never modified in place; builders return new documents that
    may share unmodified section objects with their source.

    Attributes:
        id: Resume identifier
        title: Display title
        sections: Ordered sections (any mix of variants, repeats allowed)
        template: Layout name (cosmetic)
        theme: Color theme; only SAFE_THEMES avoid a small ATS penalty
        ats_score: Last computed ATS score (0-100)
        last_updated: When the resume was last changed
    """

    id: str
    title: str = "My Resume"
    sections: List[ResumeSection] = field(default_factory=list)
    template: str = "professional"
    theme: Optional[str] = "blue"
    ats_score: int = 0
    last_updated: datetime = field(default_factory=now)

    @property
    def section_types(self) -> List[str]:
        return [section.section_type for section in self.sections]

    @property
    def skills(self) -> List[str]:
        """Skills of the first skills section (empty if the resume has none)."""
        section = self.get_section(SkillsSection.section_type)
        return list(section.skills) if section else []

    def get_section(self, section_type: str) -> Optional[ResumeSection]:
        """First section of the given type, or None."""
        for section in self.sections:
            if section.section_type == section_type:
                return section
        return None

    def with_sections(self, sections: Sequence[ResumeSection]) -> "ResumeDocument":
        return replace(self, sections=list(sections))

    def with_ats_score(self, ats_score: int) -> "ResumeDocument":
        return replace(self, ats_score=int(clamp(ats_score)))

    def sections_json(self) -> str:
        """Compact JSON of every section ({"id", "type", "content"}), as scanned by ATS checks."""
        return json.dumps([section.to_dict() for section in self.sections], separators=(",", ":"), ensure_ascii=False)

    def content_length(self) -> int:
        """Total length of each section's compact JSON content."""
        return sum(
            len(json.dumps(section.content_dict(), separators=(",", ":"), ensure_ascii=False))
            for section in self.sections
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ResumeDocument":
        """
        Build a resume from a plain mapping.

        Raises:
            InvalidResumeStructureError: If the mapping or any section is malformed
        """
        if not isinstance(data, Mapping):
            raise InvalidResumeStructureError(f"Resume must be a mapping, got {type(data).__name__}")
        if not data.get("id"):
            raise InvalidResumeStructureError("Resume is missing required field 'id'")

        raw_sections = data.get("sections") or []
        if not isinstance(raw_sections, (list, tuple)):
            raise InvalidResumeStructureError("'sections' must be a list", content=raw_sections)

        last_updated = optional_datetime(data, "last_updated", "ResumeDocument")
        return cls(
            id=str(data["id"]),
            title=_text(data.get("title")) or "My Resume",
            sections=[section_from_dict(section) for section in raw_sections],
            template=data.get("template") or "professional",
            theme=data.get("theme"),
            ats_score=clamp(int(data.get("ats_score") or 0)),
            last_updated=last_updated or now(),
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ResumeDocument":
        """
        Load a resume from a YAML file.

        Accepts either the resume mapping itself or one nested under a
        top-level 'resume' key.

        Raises:
            FileNotFoundError: If yaml_path does not exist
            InvalidResumeStructureError: If the YAML is not a valid resume
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"YAML file not found: {yaml_path}")

        yaml_dict = OmegaConf.to_container(OmegaConf.load(yaml_path), resolve=True)
        if isinstance(yaml_dict, dict) and "resume" in yaml_dict:
            yaml_dict = yaml_dict["resume"]
        return cls.from_dict(yaml_dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "template": self.template,
            "theme": self.theme,
            "ats_score": self.ats_score,
            "last_updated": self.last_updated.isoformat(),
            "sections": [section.to_dict() for section in self.sections],
        }
