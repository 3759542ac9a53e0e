"""
COMPASS - Career Outcome Metrics for Placement And Skill Scoring

A domain-driven placement dashboard core that turns job listings, resumes and an
application pipeline into a single readiness score.

Architecture:
- Intake Context: Job description analysis (skills, experience, responsibilities)
- Targeting Context: Job-to-candidate match scoring, filtering and ranking
- Templating Context: Structured resume model, ATS scoring and optimization
- Tracking Context: Applications and the user state record
- Coaching Context: Readiness score, notifications and nudges
- Orchestration Context: Automation flow run whenever a job is saved
"""

__version__ = "0.1.0"
