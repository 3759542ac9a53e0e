"""
Unit tests for job match scoring, filtering, ranking and trends.
"""

import random

import pytest

from compass.contexts.intake.job_data_structure import Job, SalaryRange
from compass.contexts.targeting.job_matcher import (
    JobFilter,
    MatchPreferences,
    analyze_trends,
    calculate_company_match,
    calculate_location_match,
    calculate_match_score,
    calculate_skills_match,
    calculate_title_match,
    filter_jobs,
    get_top_jobs,
    rank_jobs,
    score_job,
)


def make_job(job_id, title="Developer", company="Acme", location="Remote", requirements=None, **kwargs):
    return Job(
        id=job_id,
        title=title,
        company=company,
        location=location,
        requirements=list(requirements or []),
        **kwargs,
    )


@pytest.mark.unit
class TestFactorScores:
    """Test the four independently scored factors."""

    def test_title_contained_either_way(self):
        assert calculate_title_match("Senior Frontend Developer", "frontend developer") == 100
        assert calculate_title_match("Developer", "Senior Developer") == 100

    def test_title_word_overlap_relative_to_longer_title(self):
        score = calculate_title_match("Senior Frontend Engineer", "Frontend Developer")

        assert score == pytest.approx(100 / 3)

    def test_title_without_target_is_neutral(self):
        assert calculate_title_match("Anything", None) == 50
        assert calculate_title_match("Anything", "") == 50

    def test_skills_match_either_direction(self):
        assert calculate_skills_match(["React", "AWS"], ["react native"]) == 50
        assert calculate_skills_match(["Node.js"], ["node"]) == 100

    def test_skills_without_requirements_is_neutral(self):
        assert calculate_skills_match([], ["Python"]) == 50

    def test_blank_resume_skill_matches_nothing(self):
        assert calculate_skills_match(["AWS"], [""]) == 0

    def test_location(self):
        assert calculate_location_match("Remote, US", ["remote"]) == 100
        assert calculate_location_match("Berlin", ["Remote"]) == 30
        assert calculate_location_match("Berlin", []) == 50

    def test_company(self):
        assert calculate_company_match("Nimbus Cloud Inc", ["nimbus cloud"]) == 100
        assert calculate_company_match("Acme", ["Nimbus"]) == 40
        assert calculate_company_match("Acme", []) == 50


@pytest.mark.unit
class TestCalculateMatchScore:
    """Test the weighted aggregate."""

    def test_title_match_with_no_requirements(self):
        """30 (title) + 20 (neutral skills) + 7.5 + 7.5 (neutral location/company)."""
        job = Job(id="1", title="Frontend Developer", company="Acme", requirements=[])
        preferences = MatchPreferences(target_role="Frontend Developer")

        assert calculate_match_score(job, [], preferences) == 65

    def test_perfect_match(self):
        job = make_job("1", title="Frontend Developer", company="Nimbus", location="Remote", requirements=["React"])
        preferences = MatchPreferences(
            target_role="Frontend Developer", target_companies=["Nimbus"], preferred_locations=["Remote"]
        )

        assert calculate_match_score(job, ["React"], preferences) == 100

    def test_no_preferences_is_neutral(self):
        job = make_job("1", requirements=[])

        assert calculate_match_score(job, []) == 50

    def test_half_points_round_up(self):
        """Location 30 and company 40 give 15 + 20 + 4.5 + 6 = 45.5."""
        job = make_job("1", title="Developer", company="Acme", location="Berlin", requirements=[])
        preferences = MatchPreferences(target_companies=["Nimbus"], preferred_locations=["Remote"])

        assert calculate_match_score(job, [], preferences) == 46

    def test_scores_stay_in_bounds(self):
        rng = random.Random(11)
        words = ["React", "AWS", "Docker", "Python", "Go", "Senior", "Engineer", "Remote", "Berlin"]

        for index in range(200):
            job = make_job(
                str(index),
                title=" ".join(rng.sample(words, 2)),
                location=rng.choice(words),
                requirements=rng.sample(words, rng.randint(0, 4)),
            )
            preferences = MatchPreferences(
                target_role=rng.choice([None, " ".join(rng.sample(words, 2))]),
                target_companies=rng.sample(words, rng.randint(0, 2)),
                preferred_locations=rng.sample(words, rng.randint(0, 2)),
            )
            score = calculate_match_score(job, rng.sample(words, rng.randint(0, 3)), preferences)

            assert isinstance(score, int)
            assert 0 <= score <= 100

    def test_score_job_returns_copy(self):
        job = make_job("1", requirements=[])
        scored = score_job(job, [], MatchPreferences(target_role="Developer"))

        assert scored.match_score == 65
        assert job.match_score == 0


@pytest.mark.unit
class TestFilterJobs:
    """Test AND-combined substring filters."""

    def setup_method(self):
        self.jobs = [
            make_job("1", title="Frontend Developer", location="Remote", description="React and TypeScript"),
            make_job("2", title="Backend Developer", location="Berlin", description="Go services"),
            make_job("3", title="Data Engineer", location="Remote, EU", description="Spark pipelines"),
        ]

    def test_no_criteria_keeps_everything(self):
        assert filter_jobs(self.jobs) == self.jobs

    def test_title_filter(self):
        assert [j.id for j in filter_jobs(self.jobs, JobFilter(title="developer"))] == ["1", "2"]

    def test_keywords_match_any_in_title_or_description(self):
        criteria = JobFilter(keywords=["react", "engineer"])

        assert [j.id for j in filter_jobs(self.jobs, criteria)] == ["1", "3"]

    def test_filters_combine(self):
        criteria = JobFilter(title="developer", location="remote")

        assert [j.id for j in filter_jobs(self.jobs, criteria)] == ["1"]


@pytest.mark.unit
class TestRanking:
    """Test ranking and top-N selection."""

    def test_rank_is_descending_permutation(self):
        rng = random.Random(3)
        jobs = [make_job(str(i), match_score=rng.randint(0, 100)) for i in range(30)]

        ranked = rank_jobs(jobs)

        assert sorted(j.id for j in ranked) == sorted(j.id for j in jobs)
        assert all(a.match_score >= b.match_score for a, b in zip(ranked, ranked[1:]))

    def test_ties_keep_input_order(self):
        jobs = [make_job("a", match_score=70), make_job("b", match_score=90), make_job("c", match_score=70)]

        assert [j.id for j in rank_jobs(jobs)] == ["b", "a", "c"]

    def test_input_is_not_reordered(self):
        jobs = [make_job("a", match_score=10), make_job("b", match_score=90)]
        rank_jobs(jobs)

        assert [j.id for j in jobs] == ["a", "b"]

    def test_top_jobs(self):
        jobs = [make_job(str(i), match_score=i * 10) for i in range(8)]

        assert [j.id for j in get_top_jobs(jobs)] == ["7", "6", "5", "4", "3"]
        assert [j.id for j in get_top_jobs(jobs, 2)] == ["7", "6"]


@pytest.mark.unit
class TestAnalyzeTrends:
    """Test requirement, role and salary summaries."""

    def test_counts_and_salary(self):
        jobs = [
            make_job("1", title="Frontend Developer", requirements=["React", "CSS"],
                     salary=SalaryRange(min=100000, max=140000)),
            make_job("2", title="Backend Developer", requirements=["Go", "React"],
                     salary=SalaryRange(min=120000, max=160000)),
            make_job("3", title="Frontend Engineer", requirements=["React"]),
        ]

        trends = analyze_trends(jobs)

        assert trends.common_skills == ["React", "CSS", "Go"]
        assert trends.common_roles[:2] == ["Frontend", "Developer"]
        assert trends.salary_trend.min == 100000
        assert trends.salary_trend.max == 160000
        assert trends.salary_trend.avg == 130000

    def test_no_salaries(self):
        trends = analyze_trends([make_job("1", requirements=["React"])])

        assert trends.salary_trend.min == 0
        assert trends.salary_trend.max == 0
        assert trends.salary_trend.avg == 0

    def test_empty_input(self):
        trends = analyze_trends([])

        assert trends.common_skills == []
        assert trends.common_roles == []
