"""
Unit tests for the automation flow run when a job is saved.
"""

import pytest

from compass.contexts.coaching.readiness import calculate_readiness_score
from compass.contexts.intake.job_data_structure import Difficulty, JDAnalysis, Job
from compass.contexts.orchestration.automation_flow import (
    generate_resume_improvement_suggestions,
    handle_job_saved,
    run_full_job_application_flow,
)
from compass.contexts.tracking.user_state import NotificationType


@pytest.mark.unit
class TestRunFullJobApplicationFlow:
    """Test the analyze -> compare -> recommend -> optimize -> re-score pipeline."""

    def test_flow_result(self, scenario_job, complete_resume):
        result = run_full_job_application_flow(scenario_job, complete_resume)

        assert result.analysis.job_id == "job-react"
        assert result.analysis.difficulty_rating == Difficulty.HARD
        assert result.matched_skills == ["aws", "docker"]
        assert result.missing_skills == ["react"]
        assert result.analysis.missing_skills == ["react"]
        assert result.alignment_score == 67

    def test_recommendations(self, scenario_job, complete_resume):
        result = run_full_job_application_flow(scenario_job, complete_resume)

        assert result.resume_recommendations == [
            "Learn these missing skills: react",
            "Add these keywords to your skills: aws, docker, react",
            "Allocate 45 hours for interview preparation",
        ]

    def test_optimized_resume_is_rescored(self, scenario_job, complete_resume):
        result = run_full_job_application_flow(scenario_job, complete_resume)

        assert result.optimized_resume.skills == [
            "Python", "Go", "PostgreSQL", "Docker", "AWS", "aws", "docker", "react", "develop",
        ]
        assert result.optimized_resume.ats_score == result.ats_result.score == 100
        assert complete_resume.skills == ["Python", "Go", "PostgreSQL", "Docker", "AWS"]
        assert complete_resume.ats_score == 0


@pytest.mark.unit
class TestGenerateResumeImprovementSuggestions:
    """Test suggestion order and the cap."""

    def test_all_suggestions(self):
        analysis = JDAnalysis(
            keywords_for_resume=["go", "rust", "kafka", "grpc"],
            responsibilities=["Own the ingestion service", "Mentor engineers"],
            estimated_preparation_time=12,
        )

        suggestions = generate_resume_improvement_suggestions(analysis, [], ["go", "rust", "kafka", "grpc"])

        assert suggestions == [
            "Learn these missing skills: go, rust, kafka",
            "Add these keywords to your skills: go, rust, kafka",
            "Highlight achievements related to: Own the ingestion service",
            "Allocate 12 hours for interview preparation",
        ]

    def test_nothing_to_suggest(self):
        assert generate_resume_improvement_suggestions(JDAnalysis(), [], []) == []


@pytest.mark.unit
class TestHandleJobSaved:
    """Test the save command wrapper on the user record."""

    def test_unknown_job_leaves_user_unchanged(self, user_with_resume, reference_time):
        user, result = handle_job_saved(user_with_resume, "missing", now=reference_time)

        assert user is user_with_resume
        assert result is None

    def test_without_resume_only_saves(self, empty_user, scenario_job, reference_time):
        user = empty_user.add_job(scenario_job)

        updated, result = handle_job_saved(user, scenario_job.id, now=reference_time)

        assert result is None
        assert [j.id for j in updated.saved_jobs] == ["job-react"]
        assert updated.jd_analyses == {}

    def test_full_update(self, user_with_resume, scenario_job, reference_time):
        user = user_with_resume.add_job(scenario_job)

        updated, result = handle_job_saved(user, scenario_job.id, now=reference_time)

        assert result is not None
        assert [j.id for j in updated.saved_jobs] == ["job-react"]
        assert updated.get_job("job-react").saved is True
        assert updated.get_jd_analysis("job-react").missing_skills == ["react"]
        assert updated.current_resume_id == "resume-ada"
        assert updated.current_resume == user.current_resume
        optimized = updated.get_resume("resume-ada-job-react")
        assert optimized.skills == result.optimized_resume.skills
        assert optimized.ats_score == 100
        assert optimized.last_updated == reference_time
        assert updated.readiness_score == calculate_readiness_score(updated)
        assert updated.last_activity == reference_time
        assert updated.updated_at == reference_time

    def test_notifications_are_appended(self, user_with_resume, scenario_job, reference_time):
        user = user_with_resume.add_job(scenario_job)

        updated, _ = handle_job_saved(user, scenario_job.id, now=reference_time)

        # aws and docker are covered by the resume, so alignment is fine
        assert [n.type for n in updated.notifications] == []

        rust_job = Job(
            id="job-rust",
            title="Rust Engineer",
            company="Oxide",
            description="Requirements: must know Rust. Kafka and Kubernetes daily.",
        )
        low_alignment = user.add_job(rust_job)
        updated, _ = handle_job_saved(low_alignment, "job-rust", now=reference_time)

        assert [n.type for n in updated.notifications] == [NotificationType.JD_ANALYZED_NO_ALIGNMENT]

    def test_readiness_reflects_the_unoptimized_resume(self, user_with_resume, reference_time):
        rust_job = Job(
            id="job-rust",
            title="Rust Engineer",
            company="Oxide",
            description="Requirements: must know Rust. Kafka and Kubernetes daily.",
        )
        user = user_with_resume.add_job(rust_job)

        updated, result = handle_job_saved(user, "job-rust", now=reference_time)

        assert result.alignment_score == 0
        assert "Rust" not in updated.resume_skills
        assert updated.readiness_score.jd_skill_alignment == 0
        assert updated.get_jd_analysis("job-rust").missing_skills == ["kubernetes", "rust"]

    def test_saving_again_replaces_the_optimized_copy(self, user_with_resume, scenario_job, reference_time):
        user = user_with_resume.add_job(scenario_job)

        once, _ = handle_job_saved(user, scenario_job.id, now=reference_time)
        twice, _ = handle_job_saved(once, scenario_job.id, now=reference_time)

        assert [r.id for r in twice.resumes] == ["resume-ada", "resume-ada-job-react"]

    def test_original_user_is_not_modified(self, user_with_resume, scenario_job, reference_time):
        user = user_with_resume.add_job(scenario_job)
        before = user.to_dict()

        handle_job_saved(user, scenario_job.id, now=reference_time)

        assert user.to_dict() == before
