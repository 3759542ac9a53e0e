"""
Templating Context

Responsibilities:
- Manages resume structure representation (typed sections)
- Audits resumes against ATS checks and suggests improvements
- Tailors a resume to a job's keywords
- Renders resumes as plain text

Owns: Resume structure representation, ATS rules, resume optimization
Never: Decides which jobs to target or tracks applications
"""

from compass.contexts.templating.ats_scorer import (
    ATSCheckResult,
    ATSIssues,
    KeywordReport,
    calculate_ats_score,
    get_improvement_suggestions,
)
from compass.contexts.templating.exceptions import InvalidResumeStructureError
from compass.contexts.templating.resume_builder import (
    generate_plain_text,
    generate_sample_resume,
    optimize_for_ats,
)
from compass.contexts.templating.resume_data_structure import (
    CertificationEntry,
    CertificationsSection,
    EducationEntry,
    EducationSection,
    ExperienceEntry,
    ExperienceSection,
    PersonalSection,
    ProjectEntry,
    ProjectsSection,
    ResumeDocument,
    ResumeSection,
    SkillsSection,
    SummarySection,
    section_from_dict,
)

__all__ = [
    # ATS audit
    "ATSCheckResult",
    "ATSIssues",
    "KeywordReport",
    "calculate_ats_score",
    "get_improvement_suggestions",
    # Builders
    "optimize_for_ats",
    "generate_sample_resume",
    "generate_plain_text",
    # Data structure classes
    "ResumeDocument",
    "ResumeSection",
    "PersonalSection",
    "SummarySection",
    "ExperienceSection",
    "ExperienceEntry",
    "EducationSection",
    "EducationEntry",
    "SkillsSection",
    "ProjectsSection",
    "ProjectEntry",
    "CertificationsSection",
    "CertificationEntry",
    "section_from_dict",
    "InvalidResumeStructureError",
]
