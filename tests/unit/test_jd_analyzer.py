"""
Unit tests for job description analysis.

Covers skill extraction (vocabulary and requirement phrasing), experience,
responsibilities, difficulty, preparation time, resume comparison and insights.
"""

import pytest

from compass.contexts.intake.jd_analyzer import (
    JDAnalyzer,
    analyze_job_description,
    compare_with_resume,
    generate_insights,
)
from compass.contexts.intake.job_data_structure import Difficulty, JDAnalysis

SCENARIO = (
    "We need a Senior React Developer with 5+ years experience in React, AWS, Docker. "
    "Requirements: must know React, AWS."
)


@pytest.mark.unit
class TestAnalyzeJobDescription:
    """Test the full analysis of a description."""

    def test_senior_react_scenario(self):
        """Senior posting with three technologies is Hard with 30 + 3 * 5 hours of prep."""
        analysis = analyze_job_description(SCENARIO, "Senior React Developer")

        assert analysis.required_skills == ["aws", "docker", "react"]
        assert analysis.difficulty_rating == Difficulty.HARD
        assert analysis.estimated_preparation_time == 45
        assert analysis.experience_required == "5+ years experience"

    def test_keywords_start_with_required_skills(self):
        analysis = analyze_job_description(SCENARIO, "Senior React Developer")

        assert analysis.keywords_for_resume[:3] == ["aws", "docker", "react"]
        assert "develop" in analysis.keywords_for_resume

    def test_job_id_is_attached(self):
        analysis = analyze_job_description(SCENARIO, "Senior React Developer", job_id="job-42")

        assert analysis.job_id == "job-42"
        assert analysis.missing_skills == []

    def test_description_without_signal(self):
        """Nothing recognizable yields empty lists and the Easy defaults."""
        analysis = analyze_job_description("Friendly office, great coffee.", "Barista")

        assert analysis.required_skills == []
        assert analysis.responsibilities == []
        assert analysis.experience_required == "Not specified"
        assert analysis.difficulty_rating == Difficulty.EASY
        assert analysis.estimated_preparation_time == 5

    def test_soft_skills_are_preferred_only(self):
        text = "Python engineer with strong communication and leadership."
        analysis = analyze_job_description(text, "Engineer")

        assert analysis.required_skills == ["python"]
        assert "communication" in analysis.preferred_skills
        assert "leadership" in analysis.preferred_skills
        assert "python" in analysis.preferred_skills


@pytest.mark.unit
class TestExtractSkills:
    """Test vocabulary scanning and requirement phrase capture."""

    def test_skills_are_sorted_and_unique(self):
        analyzer = JDAnalyzer()
        skills = analyzer.extract_skills("Docker, docker and AWS on AWS")

        assert skills == ["aws", "docker"]

    def test_proficiency_phrase_captures_capitalized_skill(self):
        analyzer = JDAnalyzer()
        skills = analyzer.extract_skills("Requirements: proficient in Terraform")

        assert skills == ["terraform"]

    def test_multi_word_skill_is_captured(self):
        analyzer = JDAnalyzer()
        skills = analyzer.extract_skills("Requirements: experience with Google Cloud")

        assert "google cloud" in skills

    def test_lowercase_phrase_is_not_captured(self):
        """Only Capitalized skill names are picked out of requirement phrasing."""
        analyzer = JDAnalyzer()

        assert analyzer.extract_skills("Requirements: must know terraform") == []

    def test_short_phrase_is_dropped(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_skills("Requirements: must know Go") == []

    def test_phrases_outside_requirements_block_are_ignored(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_skills("You must know Terraform.") == []


@pytest.mark.unit
class TestExtractExperience:
    """Test experience requirement patterns (first match wins)."""

    def test_years_of_experience(self):
        analyzer = JDAnalyzer()
        text = "At least 3 years of professional experience shipping software"

        assert analyzer.extract_experience(text) == "3 years of professional experience"

    def test_labelled_years(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_experience("Experience: 4 years") == "Experience: 4 years"

    def test_unlabelled_years_are_trimmed(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_experience("Must have 3 years in retail") == "3 years"

    def test_seniority_word(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_experience("Looking for a senior engineer") == "senior"

    def test_not_specified(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_experience("Great team, great product") == "Not specified"


@pytest.mark.unit
class TestExtractResponsibilities:
    """Test the responsibilities block and item filtering."""

    def test_short_fragments_are_dropped(self):
        analyzer = JDAnalyzer()
        text = (
            "Responsibilities: - Build scalable services - Mentor junior engineers - Ship "
            "Requirements: Python"
        )

        assert analyzer.extract_responsibilities(text) == [
            "Build scalable services",
            "Mentor junior engineers",
        ]

    def test_capped_at_eight(self):
        analyzer = JDAnalyzer()
        items = "\n".join(f"- Responsible task number {i}" for i in range(12))
        text = f"Responsibilities:\n{items}"

        assert len(analyzer.extract_responsibilities(text)) == 8

    def test_no_block(self):
        analyzer = JDAnalyzer()

        assert analyzer.extract_responsibilities("Just a short posting") == []


@pytest.mark.unit
class TestDifficultyAndPreparation:
    """Test difficulty rating and preparation hours."""

    def test_easy_markers(self):
        assert JDAnalyzer().determine_difficulty("Junior, entry-level role") == Difficulty.EASY

    def test_medium_markers(self):
        assert JDAnalyzer().determine_difficulty("Intermediate, mid-level engineer") == Difficulty.MEDIUM

    def test_hard_needs_strict_majority(self):
        """One hard marker against one easy marker is not Hard."""
        assert JDAnalyzer().determine_difficulty("senior or junior candidates") == Difficulty.EASY

    def test_hard_markers(self):
        assert JDAnalyzer().determine_difficulty("Principal architect") == Difficulty.HARD

    @pytest.mark.parametrize(
        "difficulty, skill_count, hours",
        [
            (Difficulty.EASY, 2, 7),
            (Difficulty.MEDIUM, 2, 21),
            (Difficulty.HARD, 0, 30),
        ],
    )
    def test_preparation_time(self, difficulty, skill_count, hours):
        skills = [f"skill{i}" for i in range(skill_count)]

        assert JDAnalyzer().estimate_preparation_time(skills, difficulty) == hours


@pytest.mark.unit
class TestCompareWithResume:
    """Test the matched/missing partition and alignment score."""

    def test_partition_keeps_required_order(self):
        analysis = JDAnalysis(required_skills=["react", "aws", "node"])
        comparison = compare_with_resume(analysis, ["React Native", "node.js"])

        assert comparison.matched_skills == ["react", "node"]
        assert comparison.missing_skills == ["aws"]
        assert sorted(comparison.matched_skills + comparison.missing_skills) == sorted(analysis.required_skills)
        assert comparison.alignment_score == 67

    def test_blank_resume_skills_match_nothing(self):
        analysis = JDAnalysis(required_skills=["aws", "docker"])
        comparison = compare_with_resume(analysis, ["", "   "])

        assert comparison.matched_skills == []
        assert comparison.alignment_score == 0

    def test_no_required_skills_is_neutral(self):
        comparison = compare_with_resume(JDAnalysis(), ["Python"])

        assert comparison.matched_skills == []
        assert comparison.missing_skills == []
        assert comparison.alignment_score == 50


@pytest.mark.unit
class TestGenerateInsights:
    """Test insight lines and their order."""

    def test_all_insights(self):
        analysis = JDAnalysis(
            required_skills=["aws", "docker", "react"],
            keywords_for_resume=["aws", "docker", "react", "develop"],
            difficulty_rating=Difficulty.HARD,
            estimated_preparation_time=45,
            missing_skills=["aws", "docker", "react", "kubernetes"],
        )

        assert generate_insights(analysis) == [
            "Focus on learning: aws, docker, react",
            "This is a senior role - ensure your experience section is strong",
            "Allocate at least 45 hours for thorough preparation",
            "Customize your resume with keywords: aws, docker, react, develop",
        ]

    def test_keyword_line_is_always_present(self):
        analysis = JDAnalysis(estimated_preparation_time=5)

        assert generate_insights(analysis) == ["Customize your resume with keywords: "]
