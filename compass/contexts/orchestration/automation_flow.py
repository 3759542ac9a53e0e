"""
Cross-context automation flow.

When a job is saved the whole pipeline runs in sequence:

1. Analyze the job description (intake)
2. Compare required skills with the current resume's skills
3. Build resume recommendations
4. Optimize the resume for the job's keywords (templating)
5. Re-score the optimized resume

handle_job_saved() wraps the flow as a command on the user record: it stores
the analysis, stores the optimized copy as a separate resume, recomputes
readiness against the unchanged current resume and appends fresh
notifications. Steps are not isolated; an exception in any step propagates to
the caller.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Tuple

from compass.contexts.coaching.notifications import generate_contextual_notifications
from compass.contexts.coaching.readiness import calculate_readiness_score
from compass.contexts.intake.jd_analyzer import analyze_job_description, compare_with_resume
from compass.contexts.intake.job_data_structure import JDAnalysis, Job
from compass.contexts.orchestration.logger import _log_info, log_step
from compass.contexts.templating.ats_scorer import ATSCheckResult, calculate_ats_score
from compass.contexts.templating.resume_builder import optimize_for_ats
from compass.contexts.templating.resume_data_structure import ResumeDocument
from compass.contexts.tracking.user_state import PlacementUser
from compass.utils.timestamp import now as current_time

MAX_RECOMMENDATIONS = 5


@dataclass
class FlowResult:
    """
    Output of one automation flow run.

    Attributes:
        analysis: JD analysis keyed to the job, with missing_skills filled in
        resume_recommendations: Up to five suggestions for the resume
        optimized_resume: Keyword-optimized copy of the resume, re-scored
        missing_skills: Required skills the resume lacks
        alignment_score: Percentage of required skills the resume covers
        matched_skills: Required skills the resume covers
        ats_result: ATS audit of the optimized resume
    """

    analysis: JDAnalysis
    resume_recommendations: List[str]
    optimized_resume: ResumeDocument
    missing_skills: List[str] = field(default_factory=list)
    alignment_score: int = 0
    matched_skills: List[str] = field(default_factory=list)
    ats_result: Optional[ATSCheckResult] = None


def generate_resume_improvement_suggestions(
    analysis: JDAnalysis, matched_skills: List[str], missing_skills: List[str]
) -> List[str]:
    """Suggestions from missing skills, keywords, responsibilities and prep time (at most 5)."""
    suggestions = []

    if missing_skills:
        suggestions.append(f"Learn these missing skills: {', '.join(missing_skills[:3])}")

    if analysis.keywords_for_resume:
        suggestions.append(f"Add these keywords to your skills: {', '.join(analysis.keywords_for_resume[:3])}")

    if analysis.responsibilities:
        suggestions.append(f"Highlight achievements related to: {analysis.responsibilities[0]}")

    if analysis.estimated_preparation_time:
        suggestions.append(f"Allocate {analysis.estimated_preparation_time} hours for interview preparation")

    return suggestions[:MAX_RECOMMENDATIONS]


def run_full_job_application_flow(job: Job, resume: ResumeDocument) -> FlowResult:
    """
    Run the full analysis and optimization pipeline for one job.

    Args:
        job: Job whose description drives the flow
        resume: Resume to compare and optimize (not modified)

    Returns:
        FlowResult with the analysis, recommendations and the optimized resume
    """
    _log_info(f"Running automation flow for job {job.id} ({job.title}) with resume {resume.id}")

    log_step(1, "analyze job description")
    analysis = analyze_job_description(job.description, job.title, job_id=job.id)

    log_step(2, f"compare {len(analysis.required_skills)} required skills with resume")
    comparison = compare_with_resume(analysis, resume.skills)
    analysis = analysis.with_missing_skills(comparison.missing_skills)

    log_step(3, "generate resume recommendations")
    recommendations = generate_resume_improvement_suggestions(
        analysis, comparison.matched_skills, comparison.missing_skills
    )

    log_step(4, f"optimize resume for {len(analysis.keywords_for_resume)} keywords")
    optimized = optimize_for_ats(resume, analysis.keywords_for_resume)

    log_step(5, "re-score optimized resume")
    ats_result = calculate_ats_score(optimized)
    optimized = optimized.with_ats_score(ats_result.score)

    _log_info(
        f"Flow complete: alignment {comparison.alignment_score}%, "
        f"{len(comparison.missing_skills)} missing skills, ATS {resume.ats_score} -> {ats_result.score}"
    )

    return FlowResult(
        analysis=analysis,
        resume_recommendations=recommendations,
        optimized_resume=optimized,
        missing_skills=comparison.missing_skills,
        alignment_score=comparison.alignment_score,
        matched_skills=comparison.matched_skills,
        ats_result=ats_result,
    )


def optimized_copy(
    resume: ResumeDocument, job: Job, optimized: ResumeDocument, moment: datetime
) -> ResumeDocument:
    """The optimized resume under its own id (`<resume id>-<job id>`)."""
    return replace(
        optimized, id=f"{resume.id}-{job.id}", title=f"{resume.title} ({job.title})", last_updated=moment
    )


def handle_job_saved(
    user: PlacementUser, job_id: str, now: Optional[datetime] = None
) -> Tuple[PlacementUser, Optional[FlowResult]]:
    """
    Save a job and run the automation flow against the current resume.

    The current resume is not replaced; alignment, weak-skill alerts and
    notifications keep reflecting what the user actually has. Saving the same
    job again overwrites its optimized copy. Unknown job ids leave the user
    unchanged. Without a current resume the job is only saved.

    Args:
        user: Current user state (not modified)
        job_id: Job being saved
        now: Reference time for timestamps and notifications

    Returns:
        (new user state, FlowResult or None if the flow did not run)
    """
    moment = now or current_time()

    job = user.get_job(job_id)
    if job is None:
        _log_info(f"Ignoring save of unknown job {job_id}")
        return user, None

    user = user.save_job(job_id, now=moment).touch(now=moment)

    resume = user.current_resume
    if resume is None:
        _log_info(f"Saved job {job_id}; no current resume, skipping automation flow")
        return user, None

    result = run_full_job_application_flow(job, resume)

    user = user.add_jd_analysis(result.analysis, now=moment)
    user = user.put_resume(optimized_copy(resume, job, result.optimized_resume, moment), now=moment)
    user = user.update_readiness_score(calculate_readiness_score(user), now=moment)

    for notification in generate_contextual_notifications(user, now=moment):
        user = user.add_notification(notification, now=moment)

    return user, result
