"""
Intake Context

Responsibilities:
- Holds job listings as they arrive from a feed or fixtures
- Analyzes free-text job descriptions (skills, experience, responsibilities, difficulty)
- Compares an analysis with a resume's skill list

Owns: Job and JDAnalysis records, extraction vocabularies, text segmentation strategies
Never: Scores resumes or decides what to apply to
"""

from compass.contexts.intake.jd_analyzer import (
    JDAnalyzer,
    SkillComparison,
    analyze_job_description,
    compare_with_resume,
    generate_insights,
)
from compass.contexts.intake.job_data_structure import Difficulty, JDAnalysis, Job, SalaryRange
from compass.contexts.intake.segmentation import MarkdownSegmenter, RegexSegmenter, TextSegmenter

__all__ = [
    # Analysis
    "JDAnalyzer",
    "SkillComparison",
    "analyze_job_description",
    "compare_with_resume",
    "generate_insights",
    # Data structures
    "Difficulty",
    "JDAnalysis",
    "Job",
    "SalaryRange",
    # Segmentation strategies
    "TextSegmenter",
    "RegexSegmenter",
    "MarkdownSegmenter",
]
