"""
Resume building: ATS optimization, a sample resume and plain-text rendering.

All operations are non-destructive. optimize_for_ats returns a new
ResumeDocument; sections it does not touch are shared with the input.
"""

from dataclasses import replace
from datetime import datetime
from typing import List, Optional, Sequence

from compass.contexts.templating.logger import _log_debug
from compass.contexts.templating.resume_data_structure import (
    EducationEntry,
    EducationSection,
    ExperienceEntry,
    ExperienceSection,
    PersonalSection,
    ResumeDocument,
    ResumeSection,
    SkillsSection,
    SummarySection,
)
from compass.utils.text_processing import contains_casefold, unique_in_order
from compass.utils.timestamp import now as current_time

MAX_SKILLS = 15
SUMMARY_KEYWORD_COUNT = 2


def _optimize_section(section: ResumeSection, job_keywords: Sequence[str]) -> ResumeSection:
    match section:
        case SkillsSection(skills=skills):
            enhanced = unique_in_order([*skills, *job_keywords])[:MAX_SKILLS]
            return replace(section, skills=enhanced)

        case SummarySection(summary=summary):
            has_keywords = any(contains_casefold(summary, keyword) for keyword in job_keywords)
            if job_keywords and not has_keywords:
                cited = ", ".join(job_keywords[:SUMMARY_KEYWORD_COUNT])
                return replace(section, summary=f"{summary} Experienced with {cited}.")
            return section

        case _:
            return section


def optimize_for_ats(resume: ResumeDocument, job_keywords: Sequence[str]) -> ResumeDocument:
    """
    Tailor a resume to a job's keywords.

    Skills sections get the keywords appended after the existing skills
    (exact-match de-duplication, at most 15 skills). A summary that mentions
    none of the keywords gets a sentence citing the first two. Every other
    section passes through unchanged.

    Args:
        resume: Resume to optimize (not modified)
        job_keywords: Keywords extracted from the job description

    Returns:
        New ResumeDocument
    """
    job_keywords = list(job_keywords)
    sections = [_optimize_section(section, job_keywords) for section in resume.sections]

    changed = sum(1 for before, after in zip(resume.sections, sections) if before is not after)
    _log_debug(f"Optimized resume {resume.id} for {len(job_keywords)} keywords ({changed} sections changed)")

    return resume.with_sections(sections)


def generate_sample_resume(now: Optional[datetime] = None) -> ResumeDocument:
    """A filled-in example resume with every section the ATS audit requires."""
    moment = now or current_time()
    return ResumeDocument(
        id=str(int(moment.timestamp() * 1000)),
        title="My Resume",
        template="professional",
        theme="blue",
        ats_score=0,
        last_updated=moment,
        sections=[
            PersonalSection(
                id="1",
                name="Your Name",
                email="your.email@example.com",
                phone="+1 (555) 123-4567",
                location="City, State",
            ),
            SummarySection(
                id="2",
                summary=(
                    "Results-driven professional with strong technical skills and proven "
                    "track record of delivering projects on time."
                ),
            ),
            ExperienceSection(
                id="3",
                experiences=[
                    ExperienceEntry(
                        position="Senior Developer",
                        company="Tech Company",
                        duration="2023 - Present",
                        achievements=[
                            "Led development of high-impact features",
                            "Improved system performance by 40%",
                            "Managed team of 3 engineers",
                        ],
                    )
                ],
            ),
            EducationSection(
                id="4",
                education=[
                    EducationEntry(
                        degree="Bachelor of Science in Computer Science",
                        institution="University Name",
                        year="2020",
                    )
                ],
            ),
            SkillsSection(
                id="5",
                skills=[
                    "JavaScript",
                    "React",
                    "TypeScript",
                    "Node.js",
                    "SQL",
                    "AWS",
                    "Docker",
                    "Problem Solving",
                    "Leadership",
                ],
            ),
        ],
    )


def _section_text(section: ResumeSection) -> str:
    """Plain text for one section; empty for kinds that are not rendered."""
    match section:
        case PersonalSection(name=name, email=email, phone=phone, location=location):
            return f"{name}\n{email} | {phone}\n{location}\n\n"

        case SummarySection(summary=summary):
            return f"PROFESSIONAL SUMMARY\n{summary}\n\n"

        case ExperienceSection(experiences=experiences):
            lines: List[str] = ["EXPERIENCE\n"]
            for exp in experiences:
                lines.append(f"{exp.position} at {exp.company}\n")
                lines.append(f"{exp.duration}\n")
                lines.extend(f"• {achievement}\n" for achievement in exp.achievements)
                lines.append("\n")
            return "".join(lines)

        case EducationSection(education=education):
            lines = ["EDUCATION\n"]
            lines.extend(f"{edu.degree} from {edu.institution} ({edu.year})\n" for edu in education)
            lines.append("\n")
            return "".join(lines)

        case SkillsSection(skills=skills):
            return f"SKILLS\n{', '.join(skills)}\n\n"

        case _:
            return ""


def generate_plain_text(resume: ResumeDocument) -> str:
    """
    Render a resume as plain text, section by section in resume order.

    Personal, summary, experience, education and skills sections are rendered;
    projects and certifications are skipped.
    """
    return "".join(_section_text(section) for section in resume.sections)
