"""
Unit tests for the ATS audit.

Each check is exercised by starting from a resume that passes everything and
breaking exactly one thing.
"""

from dataclasses import replace

import pytest

from compass.contexts.templating.ats_scorer import calculate_ats_score, get_improvement_suggestions
from compass.contexts.templating.resume_data_structure import (
    EducationEntry,
    EducationSection,
    ExperienceEntry,
    ExperienceSection,
    PersonalSection,
    ProjectEntry,
    ProjectsSection,
    ResumeDocument,
    SkillsSection,
)


def without(resume: ResumeDocument, section_type: str) -> ResumeDocument:
    return resume.with_sections([s for s in resume.sections if s.section_type != section_type])


def with_achievements(resume: ResumeDocument, achievements) -> ResumeDocument:
    experience = resume.get_section("experience")
    entry = replace(experience.experiences[0], achievements=list(achievements))
    updated = replace(experience, experiences=[entry])
    return resume.with_sections([updated if s is experience else s for s in resume.sections])


@pytest.mark.unit
class TestCalculateATSScore:
    """Test the score and the issue buckets."""

    def test_complete_resume_scores_100(self, complete_resume):
        result = calculate_ats_score(complete_resume)

        assert result.score == 100
        assert result.issues.critical == []
        assert result.issues.warnings == []
        assert result.issues.suggestions == []

    def test_action_verb_report(self, complete_resume):
        result = calculate_ats_score(complete_resume)

        assert result.keywords.found == ["achieved", "managed", "improved", "increased", "implemented", "designed"]
        assert result.keywords.missing == ["led", "coordinated", "developed", "created"]

    def test_empty_resume(self):
        """Four missing sections, short content, no verbs and no metrics: 100 - 55 - 10 - 10 - 8."""
        result = calculate_ats_score(ResumeDocument(id="empty", sections=[]))

        assert result.score == 17
        assert result.issues.critical == [
            "Missing personal information section",
            "Missing work experience or projects - at least one is required",
            "Missing skills section - essential for ATS",
        ]
        assert result.issues.warnings == [
            "Missing education section - highly recommended",
            "Resume content is too short",
        ]
        assert result.issues.suggestions == [
            "Add action verbs like: achieved, managed, improved",
            "Add quantifiable metrics and numbers to make achievements more impactful",
        ]

    @pytest.mark.parametrize(
        "section_type, expected_score",
        [
            ("personal", 85),
            ("education", 90),
            ("skills", 85),
        ],
    )
    def test_missing_section_penalties(self, complete_resume, section_type, expected_score):
        assert calculate_ats_score(without(complete_resume, section_type)).score == expected_score

    def test_projects_satisfy_experience_check(self, complete_resume):
        experience = complete_resume.get_section("experience")
        projects = ProjectsSection(
            id="6",
            projects=[ProjectEntry(name="Paytrail", description="Open source tool", technologies=["Go"])],
        )
        resume = complete_resume.with_sections(
            [projects if s is experience else s for s in complete_resume.sections]
        )

        result = calculate_ats_score(resume)

        assert "Missing work experience or projects - at least one is required" not in result.issues.critical

    def test_missing_experience_and_projects(self, complete_resume):
        result = calculate_ats_score(without(complete_resume, "experience"))

        assert "Missing work experience or projects - at least one is required" in result.issues.critical

    def test_responsibilities_label_penalty(self, complete_resume):
        experience = complete_resume.get_section("experience")
        entry = experience.experiences[0]
        labelled = replace(
            experience,
            experiences=[replace(entry, achievements=[*entry.achievements, "Responsibilities: on-call rotation"])],
        )
        resume = complete_resume.with_sections(
            [labelled if s is experience else s for s in complete_resume.sections]
        )

        result = calculate_ats_score(resume)

        assert result.score == 95
        assert result.issues.warnings == ['Avoid listing "Responsibilities:" - use achievements instead']

    def test_short_content_penalty(self):
        resume = ResumeDocument(
            id="brief",
            sections=[
                PersonalSection(id="1", name="Ada"),
                ExperienceSection(
                    id="2",
                    experiences=[
                        ExperienceEntry(
                            achievements=["Achieved, managed, improved, increased and implemented 40% gains"]
                        )
                    ],
                ),
                EducationSection(id="3", education=[EducationEntry(degree="BS")]),
                SkillsSection(id="4", skills=["Go"]),
            ],
        )

        result = calculate_ats_score(resume)

        assert resume.content_length() < 300
        assert result.score == 90
        assert result.issues.warnings == ["Resume content is too short"]
        assert result.issues.suggestions == []

    def test_six_missing_action_verbs_are_penalized(self, complete_resume):
        achievements = complete_resume.get_section("experience").experiences[0].achievements
        resume = with_achievements(complete_resume, achievements[:4])

        result = calculate_ats_score(resume)

        assert result.keywords.missing == ["implemented", "designed", "led", "coordinated", "developed", "created"]
        assert result.score == 90
        assert result.issues.suggestions == ["Add action verbs like: implemented, designed, led"]

    def test_five_missing_action_verbs_are_not_penalized(self, complete_resume):
        achievements = complete_resume.get_section("experience").experiences[0].achievements
        resume = with_achievements(complete_resume, achievements[:5])

        result = calculate_ats_score(resume)

        assert len(result.keywords.missing) == 5
        assert result.score == 100
        assert result.issues.suggestions == []

    def test_metrics_penalty(self, complete_resume):
        experience = complete_resume.get_section("experience")
        plain = ExperienceSection(
            id=experience.id,
            experiences=[
                ExperienceEntry(
                    position="Software Engineer",
                    company="Payfast",
                    duration="Since spring",
                    achievements=[
                        "Achieved high uptime for the payments API across every region we serve",
                        "Managed a small team of engineers across two time zones",
                        "Improved checkout latency for mobile customers",
                        "Increased test coverage of the billing code",
                        "Implemented idempotent retry handling for webhooks",
                        "Designed the settlement reconciliation service",
                    ],
                )
            ],
        )
        resume = complete_resume.with_sections([plain if s is experience else s for s in complete_resume.sections])
        result = calculate_ats_score(resume)

        assert "Add quantifiable metrics and numbers to make achievements more impactful" in result.issues.suggestions
        assert result.score == 92

    def test_unsafe_theme_penalty(self, complete_resume):
        result = calculate_ats_score(replace(complete_resume, theme="neon"))

        assert result.score == 97
        assert result.issues.suggestions == ["Consider using simpler color theme for better ATS compatibility"]

    @pytest.mark.parametrize("theme", ["blue", "purple", None, ""])
    def test_safe_or_unset_theme_is_not_penalized(self, complete_resume, theme):
        assert calculate_ats_score(replace(complete_resume, theme=theme)).score == 100

    def test_to_dict(self):
        data = calculate_ats_score(ResumeDocument(id="empty")).to_dict()

        assert data["score"] == 17
        assert set(data["issues"]) == {"critical", "warnings", "suggestions"}
        assert len(data["keywords"]["missing"]) == 10


@pytest.mark.unit
class TestGetImprovementSuggestions:
    """Test suggestion priority and the cap of five."""

    def test_empty_resume_suggestions_are_capped(self):
        suggestions = get_improvement_suggestions(calculate_ats_score(ResumeDocument(id="empty")))

        assert suggestions == [
            "CRITICAL: Missing personal information section - Fix immediately",
            "WARNING: Missing education section - highly recommended - Highly recommended to fix",
            "Your resume needs significant improvements for ATS",
            "Add action verbs: achieved, managed, improved",
            "Add action verbs like: achieved, managed, improved",
        ]

    def test_complete_resume_only_lists_missing_verbs(self, complete_resume):
        suggestions = get_improvement_suggestions(calculate_ats_score(complete_resume))

        assert suggestions == ["Add action verbs: led, coordinated, developed"]
