"""
Job description analysis for the Intake context.

Turns a free-text job description into a JDAnalysis: required and preferred
skills, experience requirement, responsibilities, resume keywords, difficulty
and an estimated preparation time. Also compares an analysis with a resume's
skill list and formats insights.

Everything here is keyword and regex based; no models are involved.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from compass.contexts.intake.extraction_patterns import (
    DIFFICULTY_MARKERS,
    EXPERIENCE_NOT_SPECIFIED,
    EXPERIENCE_PATTERNS,
    MAX_RESPONSIBILITIES,
    MAX_RESUME_KEYWORDS,
    MAX_SKILL_PHRASE_LENGTH,
    MIN_RESPONSIBILITY_LENGTH,
    MIN_SKILL_PHRASE_LENGTH,
    NEUTRAL_ALIGNMENT_SCORE,
    PREPARATION_BASE_HOURS,
    PREPARATION_HOURS_PER_SKILL,
    RESUME_ACTION_VERBS,
    RESUME_NOUNS,
    SKILL_PHRASE_PATTERNS,
    SOFT_SKILLS,
    TECHNICAL_SKILLS,
)
from compass.contexts.intake.job_data_structure import Difficulty, JDAnalysis
from compass.contexts.intake.logger import log_analysis_result
from compass.contexts.intake.segmentation import RegexSegmenter, TextSegmenter
from compass.utils.text_processing import (
    mutual_substring,
    non_blank,
    round_half_up,
    unique_in_order,
    unique_sorted_casefold,
)


@dataclass
class SkillComparison:
    """
    Result of comparing a JD's required skills with a resume's skills.

    matched_skills and missing_skills partition the required skills in their
    original order.
    """

    matched_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)
    alignment_score: int = NEUTRAL_ALIGNMENT_SCORE


class JDAnalyzer:
    """
    Keyword/regex job description analyzer.

    Attributes:
        segmenter: Strategy that finds the requirements and responsibilities blocks
    """

    def __init__(self, segmenter: Optional[TextSegmenter] = None):
        self.segmenter = segmenter or RegexSegmenter()

    def analyze_job_description(
        self, description: str, title: str, job_id: Optional[str] = None
    ) -> JDAnalysis:
        """
        Analyze a job description.

        Args:
            description: Free-text job description
            title: Job title (used for logging only; the description carries the signal)
            job_id: Optional job id to key the analysis by

        Returns:
            JDAnalysis with every extracted field populated
        """
        required_skills = self.extract_skills(description, is_required=True)
        preferred_skills = self.extract_skills(description, is_required=False)
        difficulty = self.determine_difficulty(description)

        analysis = JDAnalysis(
            required_skills=required_skills,
            preferred_skills=preferred_skills,
            experience_required=self.extract_experience(description),
            responsibilities=self.extract_responsibilities(description),
            keywords_for_resume=self.extract_resume_keywords(description, required_skills),
            difficulty_rating=difficulty,
            estimated_preparation_time=self.estimate_preparation_time(required_skills, difficulty),
            job_id=job_id,
        )
        log_analysis_result(title, analysis)
        return analysis

    # =========================================================================
    # EXTRACTION
    # =========================================================================

    def extract_skills(self, text: str, is_required: bool = True) -> List[str]:
        """
        Detect skills in a job description.

        Scans the whole text for the technical vocabulary (plus the soft-skill
        vocabulary for preferred skills), then mines the requirements block for
        phrases like "experience with Terraform" or "proficient in Go".

        Returns:
            Lowercased, de-duplicated, alphabetically sorted skills
        """
        text_lower = text.lower()
        vocabulary = TECHNICAL_SKILLS if is_required else TECHNICAL_SKILLS + SOFT_SKILLS
        skills = [skill for skill in vocabulary if skill in text_lower]

        requirements_text = self.segmenter.requirements_block(text)
        if requirements_text:
            for pattern in SKILL_PHRASE_PATTERNS:
                for match in pattern.finditer(requirements_text):
                    phrase = match.group(1).lower()
                    if MIN_SKILL_PHRASE_LENGTH <= len(phrase) <= MAX_SKILL_PHRASE_LENGTH:
                        skills.append(phrase)

        return unique_sorted_casefold(skills)

    def extract_experience(self, text: str) -> str:
        """
        First experience pattern match, or "Not specified".

        The match is trimmed: the labelled-years pattern may start on the
        whitespace before the number (" 3 years").
        """
        for pattern in EXPERIENCE_PATTERNS:
            match = pattern.search(text)
            if match:
                return match.group(0).strip()
        return EXPERIENCE_NOT_SPECIFIED

    def extract_responsibilities(self, text: str) -> List[str]:
        """
        Items of the responsibilities block longer than MIN_RESPONSIBILITY_LENGTH
        characters, capped at MAX_RESPONSIBILITIES.
        """
        block = self.segmenter.responsibilities_block(text)
        if not block:
            return []

        items = [
            item for item in self.segmenter.split_items(block) if len(item) > MIN_RESPONSIBILITY_LENGTH
        ]
        return items[:MAX_RESPONSIBILITIES]

    def extract_resume_keywords(self, text: str, skills: Iterable[str]) -> List[str]:
        """Skills followed by action verbs and nouns that appear in the text, capped at 20."""
        text_lower = text.lower()
        keywords = list(skills)
        keywords.extend(verb for verb in RESUME_ACTION_VERBS if verb in text_lower)
        keywords.extend(noun for noun in RESUME_NOUNS if noun in text_lower)
        return unique_in_order(keywords)[:MAX_RESUME_KEYWORDS]

    def determine_difficulty(self, text: str) -> Difficulty:
        """
        Rate difficulty by counting marker phrases per level.

        Hard needs strictly more markers than both other levels; Medium needs
        strictly more than Easy. Anything else is Easy.
        """
        text_lower = text.lower()
        counts = {
            level: sum(1 for marker in markers if marker in text_lower)
            for level, markers in DIFFICULTY_MARKERS.items()
        }
        easy, medium, hard = counts[Difficulty.EASY], counts[Difficulty.MEDIUM], counts[Difficulty.HARD]

        if hard > medium and hard > easy:
            return Difficulty.HARD
        if medium > easy:
            return Difficulty.MEDIUM
        return Difficulty.EASY

    def estimate_preparation_time(self, skills: List[str], difficulty: Difficulty) -> int:
        """Hours = base[difficulty] + len(skills) * per_skill[difficulty]."""
        return PREPARATION_BASE_HOURS[difficulty] + len(skills) * PREPARATION_HOURS_PER_SKILL[difficulty]

    # =========================================================================
    # COMPARISON AND INSIGHTS
    # =========================================================================

    def compare_with_resume(self, analysis: JDAnalysis, resume_skills: Iterable[str]) -> SkillComparison:
        """
        Split required skills into matched and missing.

        A required skill matches when it and any resume skill contain one
        another (case-insensitive). Blank resume skills are ignored.
        """
        skills = non_blank(resume_skills)
        required = list(analysis.required_skills)

        matched = [req for req in required if any(mutual_substring(req, skill) for skill in skills)]
        missing = [req for req in required if req not in matched]

        if required:
            alignment = round_half_up(len(matched) / len(required) * 100)
        else:
            alignment = NEUTRAL_ALIGNMENT_SCORE

        return SkillComparison(matched_skills=matched, missing_skills=missing, alignment_score=alignment)

    def generate_insights(self, analysis: JDAnalysis) -> List[str]:
        """Human-readable next steps for one analysis, most actionable first."""
        insights = []

        if analysis.missing_skills:
            insights.append(f"Focus on learning: {', '.join(analysis.missing_skills[:3])}")

        if analysis.difficulty_rating == Difficulty.HARD:
            insights.append("This is a senior role - ensure your experience section is strong")

        if analysis.estimated_preparation_time > 20:
            insights.append(
                f"Allocate at least {analysis.estimated_preparation_time} hours for thorough preparation"
            )

        insights.append(
            f"Customize your resume with keywords: {', '.join(analysis.keywords_for_resume[:5])}"
        )

        return insights


jd_analyzer = JDAnalyzer()


def analyze_job_description(description: str, title: str, job_id: Optional[str] = None) -> JDAnalysis:
    """Analyze a job description with the default (regex) segmenter."""
    return jd_analyzer.analyze_job_description(description, title, job_id=job_id)


def compare_with_resume(analysis: JDAnalysis, resume_skills: Iterable[str]) -> SkillComparison:
    return jd_analyzer.compare_with_resume(analysis, resume_skills)


def generate_insights(analysis: JDAnalysis) -> List[str]:
    return jd_analyzer.generate_insights(analysis)
