"""
Pytest configuration and shared fixtures for the COMPASS tests.
"""

from datetime import datetime
from pathlib import Path

import pytest

from compass.contexts.intake.job_data_structure import Job
from compass.contexts.templating.resume_data_structure import (
    EducationEntry,
    EducationSection,
    ExperienceEntry,
    ExperienceSection,
    PersonalSection,
    ResumeDocument,
    SkillsSection,
    SummarySection,
)
from compass.contexts.tracking.user_state import PlacementUser

FIXTURES_PATH = Path(__file__).parent / "fixtures"

SCENARIO_DESCRIPTION = (
    "We need a Senior React Developer with 5+ years experience in React, AWS, Docker. "
    "Requirements: must know React, AWS."
)


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def reference_time() -> datetime:
    """Fixed 'now' for every time-dependent test."""
    return datetime(2025, 6, 1, 9, 0, 0)


@pytest.fixture
def complete_resume(reference_time) -> ResumeDocument:
    """
    Resume that passes every ATS check (score 100).

    Uses six of the ten tracked action verbs; "led", "coordinated", "developed"
    and "created" appear nowhere in its text.
    """
    return ResumeDocument(
        id="resume-ada",
        title="Backend Resume",
        theme="blue",
        last_updated=reference_time,
        sections=[
            PersonalSection(
                id="1",
                name="Ada Park",
                email="ada.park@example.com",
                phone="555-0100",
                location="Seattle, WA",
            ),
            SummarySection(
                id="2",
                summary="Backend engineer focused on reliable payment APIs and clear documentation for partner teams.",
            ),
            ExperienceSection(
                id="3",
                experiences=[
                    ExperienceEntry(
                        position="Software Engineer",
                        company="Payfast",
                        duration="2019 - 2024",
                        achievements=[
                            "Achieved 99.9% uptime for the payments API",
                            "Managed a team of 4 engineers across two time zones",
                            "Improved checkout latency by 40%",
                            "Increased test coverage from 55% to 90%",
                            "Implemented idempotent retry handling for webhooks",
                            "Designed the settlement reconciliation service",
                        ],
                    )
                ],
            ),
            EducationSection(
                id="4",
                education=[
                    EducationEntry(degree="B.S. Computer Science", institution="University of Washington", year="2019")
                ],
            ),
            SkillsSection(id="5", skills=["Python", "Go", "PostgreSQL", "Docker", "AWS"]),
        ],
    )


@pytest.fixture
def scenario_job() -> Job:
    return Job(
        id="job-react",
        title="Senior React Developer",
        company="Nimbus Cloud",
        location="Remote, US",
        description=SCENARIO_DESCRIPTION,
        requirements=["React", "AWS", "Docker"],
    )


@pytest.fixture
def empty_user(reference_time) -> PlacementUser:
    """User with no resume, jobs, applications or practice data, active right now."""
    return PlacementUser(
        id="user-1",
        name="Ada Park",
        email="ada.park@example.com",
        last_activity=reference_time,
        created_at=reference_time,
        updated_at=reference_time,
    )


@pytest.fixture
def user_with_resume(empty_user, complete_resume, reference_time) -> PlacementUser:
    """empty_user with complete_resume selected as the current resume (stored ATS score 100)."""
    resume = complete_resume.with_ats_score(100)
    return empty_user.add_resume(resume, now=reference_time).set_current_resume(resume.id, now=reference_time)
