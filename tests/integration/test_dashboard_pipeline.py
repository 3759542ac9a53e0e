"""
Integration tests for the dashboard and save-job pipeline over YAML fixtures.

Fixture expectations are computed at 2025-06-01T09:00:00 (the reference_time
fixture).
"""

import pytest

from compass.contexts.coaching import (
    build_dashboard_summary,
    generate_contextual_notifications,
    generate_nudges,
    generate_readiness_report,
    get_intervention_alerts,
    prioritize_notifications,
    should_notify,
)
from compass.contexts.intake import JDAnalyzer, MarkdownSegmenter, RegexSegmenter
from compass.contexts.intake.job_data_structure import Difficulty
from compass.contexts.orchestration import (
    calculate_pipeline_health,
    handle_job_saved,
    identify_stalled_applications,
)
from compass.contexts.templating import ResumeDocument, calculate_ats_score
from compass.contexts.tracking import PlacementUser
from compass.contexts.tracking.user_state import NotificationType


@pytest.fixture
def user(fixtures_path) -> PlacementUser:
    return PlacementUser.from_yaml(fixtures_path / "user.yaml")


@pytest.mark.integration
class TestUserFixtureLoading:
    """Test that the user fixture loads into a complete record."""

    def test_loaded_fields(self, user):
        assert user.id == "user-jordan"
        assert user.current_resume.id == "resume-1"
        assert [j.id for j in user.saved_jobs] == ["job-1", "job-2"]
        assert [a.id for a in user.applications] == ["app-1", "app-2", "app-3"]
        assert list(user.jd_analyses) == ["job-1", "job-2"]
        assert user.get_jd_analysis("job-1").job_id == "job-1"

    def test_stored_readiness_is_recomputed(self, user):
        # 24 + 10 + 21.25 + 3 + 5 = 63.25
        assert user.readiness_score.overall_score == 63

    def test_missing_file(self, fixtures_path):
        with pytest.raises(FileNotFoundError):
            PlacementUser.from_yaml(fixtures_path / "nobody.yaml")


@pytest.mark.integration
class TestDashboard:
    """Test the dashboard roll-up for the fixture user."""

    def test_breakdown(self, user, reference_time):
        summary = build_dashboard_summary(user, now=reference_time)

        assert summary.breakdown.to_dict() == {
            "job_match_quality": 93,
            "jd_skill_alignment": 33,
            "resume_ats_score": 85,
            "application_progress": 28,
            "practice_completion": 75,
            "overall_score": 68,
        }
        assert summary.readiness_score == 68

    def test_summary_fields(self, user, reference_time):
        summary = build_dashboard_summary(user, now=reference_time)

        assert [j.id for j in summary.top_job_matches] == ["job-1", "job-2"]
        assert summary.next_action_recommendation == "Learn missing skills identified in job descriptions"
        assert summary.weak_skill_alerts == ["docker is required in 2 job descriptions - consider learning this"]
        pipeline = summary.application_pipeline
        assert (pipeline.saved, pipeline.applied, pipeline.interview_scheduled, pipeline.offers) == (0, 1, 1, 0)

    def test_report_and_nudges(self, user, reference_time):
        breakdown = build_dashboard_summary(user, now=reference_time).breakdown

        report = generate_readiness_report(user, breakdown)

        assert report.level == "Proficient"
        assert report.recommendations == [
            "Focus on learning high-demand skills from analyzed jobs",
            "Apply to at least 5-10 matching jobs",
            "Complete more practice problems to improve coding skills",
        ]
        assert generate_nudges(user, breakdown) == [
            "Start applying to 3-5 strong job matches",
            "Practice mock interviews to prepare",
        ]

    def test_notifications(self, user, reference_time):
        notifications = generate_contextual_notifications(user, now=reference_time)

        assert [n.type for n in notifications] == [
            NotificationType.JD_ANALYZED_NO_ALIGNMENT,
            NotificationType.INTERVIEW_REMINDER,
        ]
        assert notifications[0].message.startswith("2 analyzed jobs")
        assert notifications[1].message.startswith("You have 1 interview(s)")
        assert [n.type for n in prioritize_notifications(notifications)][0] == NotificationType.INTERVIEW_REMINDER
        assert should_notify(user, now=reference_time) is True
        assert get_intervention_alerts(user, now=reference_time) == []

    def test_pipeline(self, user, reference_time):
        health = calculate_pipeline_health(user.applications, now=reference_time)

        assert health.health == 50
        assert health.status == "Warning"
        assert [a.id for a in identify_stalled_applications(user.applications, now=reference_time)] == ["app-2"]


@pytest.mark.integration
class TestSaveJobPipeline:
    """Test saving a new job end to end."""

    def test_saving_job_three(self, user, reference_time):
        updated, result = handle_job_saved(user, "job-3", now=reference_time)

        analysis = updated.get_jd_analysis("job-3")
        assert analysis.required_skills == ["django", "python", "sql"]
        assert analysis.difficulty_rating == Difficulty.EASY
        assert analysis.estimated_preparation_time == 8
        assert result.alignment_score == 0

        assert [j.id for j in updated.saved_jobs] == ["job-1", "job-2", "job-3"]
        assert updated.current_resume.ats_score == 85
        assert updated.get_resume("resume-1-job-3").ats_score == 100
        assert updated.last_activity == reference_time

    def test_notifications_are_appended_after_existing(self, user, reference_time):
        updated, _ = handle_job_saved(user, "job-3", now=reference_time)

        assert [n.id for n in updated.notifications][0] == "notif-old"
        assert len(updated.notifications) == 3
        # The current resume is unchanged, so job-3 joins job-1 and job-2 as misaligned
        assert updated.notifications[1].message.startswith("3 analyzed jobs")
        assert updated.notifications[2].type == NotificationType.INTERVIEW_REMINDER


@pytest.mark.integration
class TestDocumentFixtures:
    """Test the resume and job description fixtures."""

    def test_resume_fixture_scores_full_marks(self, fixtures_path):
        resume = ResumeDocument.from_yaml(fixtures_path / "resume.yaml")

        assert calculate_ats_score(resume).score == 100

    def test_markdown_job_description(self, fixtures_path):
        text = (fixtures_path / "job_description.md").read_text(encoding="utf-8")

        markdown = JDAnalyzer(segmenter=MarkdownSegmenter()).analyze_job_description(text, "Frontend Engineer")
        regex = JDAnalyzer(segmenter=RegexSegmenter()).analyze_job_description(text, "Frontend Engineer")

        assert len(markdown.responsibilities) == 3
        assert regex.responsibilities == []
        assert markdown.required_skills == ["docker", "graphql", "graphql apis", "java", "javascript", "react", "typescript"]
        assert markdown.difficulty_rating == Difficulty.MEDIUM
        assert markdown.estimated_preparation_time == 36
        assert markdown.experience_required == "3 years of professional experience"
