#!/usr/bin/env python3
"""
Command-line interface for the COMPASS placement core.

Records are read from YAML (loaded with OmegaConf). Every command configures a
loguru session (file + console) before doing any work.

Commands:
    analyze   - Analyze a job description text file (optionally against a resume)
    score     - ATS audit of a resume YAML (optionally optimized / as plain text)
    flow      - Run the full automation flow for a job YAML and a resume YAML
    dashboard - Readiness breakdown, report, notifications, nudges and alerts for a user YAML
"""

from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from compass.contexts.coaching import (
    build_dashboard_summary,
    generate_contextual_notifications,
    generate_nudges,
    generate_readiness_report,
    get_intervention_alerts,
    prioritize_notifications,
)
from compass.contexts.coaching.logger import setup_coaching_logger
from compass.contexts.intake import JDAnalyzer, Job, MarkdownSegmenter, RegexSegmenter
from compass.contexts.intake.logger import setup_intake_logger
from compass.contexts.orchestration import (
    calculate_pipeline_health,
    identify_stalled_applications,
    run_full_job_application_flow,
)
from compass.contexts.orchestration.logger import setup_flow_logger
from compass.contexts.templating import (
    ResumeDocument,
    calculate_ats_score,
    generate_plain_text,
    get_improvement_suggestions,
    optimize_for_ats,
)
from compass.contexts.templating.logger import setup_templating_logger
from compass.contexts.tracking import PlacementUser
from compass.utils.timestamp import format_timestamp, parse_timestamp

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Score job descriptions, resumes and placement readiness",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"✗ {message}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _header(text: str) -> None:
    typer.secho(f"\n{text}", fg=typer.colors.BLUE, bold=True)


def _bullets(items: List[str], empty: str = "(none)") -> None:
    if not items:
        typer.echo(f"  {empty}")
    for item in items:
        typer.echo(f"  • {item}")


def _load_job(job_path: Path) -> Job:
    if not job_path.exists():
        raise FileNotFoundError(f"YAML file not found: {job_path}")
    data = OmegaConf.to_container(OmegaConf.load(job_path), resolve=True)
    if isinstance(data, dict) and "job" in data:
        data = data["job"]
    return Job.from_dict(data)


@app.command("analyze")
def analyze_command(
    jd_file: Path = typer.Argument(..., help="Text or markdown file with the job description"),
    title: str = typer.Option("", "--title", "-t", help="Job title (defaults to the file name)"),
    resume: Optional[Path] = typer.Option(None, "--resume", "-r", help="Resume YAML to compare against"),
    markdown: bool = typer.Option(False, "--markdown", "-m", help="Segment by markdown headers"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Log directory (default: settings)"),
):
    """
    Analyze a job description.

    Examples:\n

        $ placement.py analyze job.md --title "Senior React Developer"

        $ placement.py analyze job.md --markdown --resume resume.yaml
    """
    setup_intake_logger(log_dir, source=str(jd_file))

    try:
        if not jd_file.exists():
            raise FileNotFoundError(f"Job description not found: {jd_file}")
        description = jd_file.read_text(encoding="utf-8")
        segmenter = MarkdownSegmenter() if markdown else RegexSegmenter()
        analyzer = JDAnalyzer(segmenter=segmenter)
        analysis = analyzer.analyze_job_description(description, title or jd_file.stem)

        resume_doc = ResumeDocument.from_yaml(resume) if resume else None
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    _header(f"Analysis: {title or jd_file.stem}")
    typer.echo(f"  Difficulty:   {analysis.difficulty_rating.value}")
    typer.echo(f"  Experience:   {analysis.experience_required}")
    typer.echo(f"  Preparation:  {analysis.estimated_preparation_time} hours")

    _header("Required skills")
    _bullets(analysis.required_skills)
    _header("Preferred skills")
    _bullets(analysis.preferred_skills)
    _header("Responsibilities")
    _bullets(analysis.responsibilities)
    _header("Resume keywords")
    typer.echo(f"  {', '.join(analysis.keywords_for_resume) or '(none)'}")

    if resume_doc is not None:
        comparison = analyzer.compare_with_resume(analysis, resume_doc.skills)
        analysis = analysis.with_missing_skills(comparison.missing_skills)

        _header(f"Resume alignment: {comparison.alignment_score}%")
        typer.secho(f"  Matched: {', '.join(comparison.matched_skills) or '(none)'}", fg=typer.colors.GREEN)
        typer.secho(f"  Missing: {', '.join(comparison.missing_skills) or '(none)'}", fg=typer.colors.YELLOW)

    _header("Insights")
    _bullets(analyzer.generate_insights(analysis))


@app.command("score")
def score_command(
    resume_path: Path = typer.Argument(..., help="Resume YAML file"),
    optimize: Optional[List[str]] = typer.Option(
        None, "--optimize", "-o", help="Job keyword to optimize for (repeatable)"
    ),
    plaintext: bool = typer.Option(False, "--plaintext", "-p", help="Also print the plain-text rendering"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Log directory (default: settings)"),
):
    """
    ATS audit of a resume.

    Examples:\n

        $ placement.py score resume.yaml

        $ placement.py score resume.yaml -o react -o aws --plaintext
    """
    setup_templating_logger(log_dir, resume_path=str(resume_path))

    try:
        resume = ResumeDocument.from_yaml(resume_path)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    if optimize:
        before = calculate_ats_score(resume).score
        resume = optimize_for_ats(resume, optimize)
        typer.echo(f"Optimized for: {', '.join(optimize)} (score before: {before})")

    result = calculate_ats_score(resume)
    color = typer.colors.GREEN if result.score >= 70 else typer.colors.YELLOW
    typer.secho(f"\nATS score: {result.score}/100", fg=color, bold=True)

    _header("Critical")
    _bullets(result.issues.critical)
    _header("Warnings")
    _bullets(result.issues.warnings)
    _header("Suggestions")
    _bullets(result.issues.suggestions)
    _header("Action verbs")
    typer.echo(f"  Found:   {', '.join(result.keywords.found) or '(none)'}")
    typer.echo(f"  Missing: {', '.join(result.keywords.missing) or '(none)'}")
    _header("Top improvements")
    _bullets(get_improvement_suggestions(result))

    if plaintext:
        _header("Plain text")
        typer.echo(generate_plain_text(resume))


@app.command("flow")
def flow_command(
    job_path: Path = typer.Argument(..., help="Job YAML file"),
    resume_path: Path = typer.Argument(..., help="Resume YAML file"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Log directory (default: settings)"),
):
    """
    Run the automation flow: analyze, compare, recommend, optimize, re-score.

    Examples:\n

        $ placement.py flow job.yaml resume.yaml
    """
    try:
        job = _load_job(job_path)
        resume = ResumeDocument.from_yaml(resume_path)
        setup_flow_logger(log_dir, job_id=job.id, resume_id=resume.id)
        result = run_full_job_application_flow(job, resume)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    _header(f"{job.title} @ {job.company}")
    typer.echo(f"  Alignment:  {result.alignment_score}%")
    typer.echo(f"  Difficulty: {result.analysis.difficulty_rating.value}")
    typer.echo(f"  ATS score:  {resume.ats_score} → {result.optimized_resume.ats_score}")

    _header("Missing skills")
    _bullets(result.missing_skills)
    _header("Recommendations")
    _bullets(result.resume_recommendations)
    _header("Optimized skills")
    typer.echo(f"  {', '.join(result.optimized_resume.skills) or '(none)'}")


@app.command("dashboard")
def dashboard_command(
    user_path: Path = typer.Argument(..., help="User YAML file"),
    now: Optional[str] = typer.Option(None, "--now", help="Reference time (ISO 8601, default: current time)"),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Log directory (default: settings)"),
):
    """
    Readiness dashboard for a user.

    Examples:\n

        $ placement.py dashboard user.yaml

        $ placement.py dashboard user.yaml --now 2025-06-01T09:00:00
    """
    try:
        moment = parse_timestamp(now) if now else None
        user = PlacementUser.from_yaml(user_path)
        setup_coaching_logger(log_dir, user_id=user.id)
        summary = build_dashboard_summary(user, now=moment)
    except (FileNotFoundError, ValueError) as e:
        _fail(str(e))

    breakdown = summary.breakdown
    report = generate_readiness_report(user, breakdown)
    notifications = prioritize_notifications(generate_contextual_notifications(user, now=moment))

    _header(f"Readiness: {summary.readiness_score}/100 ({report.level})")
    typer.echo(f"  Job match quality:    {breakdown.job_match_quality}")
    typer.echo(f"  JD skill alignment:   {breakdown.jd_skill_alignment}")
    typer.echo(f"  Resume ATS score:     {breakdown.resume_ats_score}")
    typer.echo(f"  Application progress: {breakdown.application_progress}")
    typer.echo(f"  Practice completion:  {breakdown.practice_completion}")
    typer.echo(f"\n  {report.summary}")
    typer.echo(f"  Last activity: {format_timestamp(user.last_activity)}")

    pipeline = summary.application_pipeline
    health = calculate_pipeline_health(user.applications, now=moment)
    _header(f"Pipeline: {health.status} ({health.health}/100)")
    typer.echo(
        f"  saved={pipeline.saved} applied={pipeline.applied} "
        f"interview_scheduled={pipeline.interview_scheduled} offers={pipeline.offers}"
    )
    typer.echo(f"  {health.analysis}")
    stalled = identify_stalled_applications(user.applications, now=moment)
    if stalled:
        typer.secho(f"  Stalled: {', '.join(a.id for a in stalled)}", fg=typer.colors.YELLOW)

    _header("Top matches")
    _bullets([f"{job.title} @ {job.company} ({job.match_score})" for job in summary.top_job_matches])

    _header("Next action")
    typer.echo(f"  {summary.next_action_recommendation}")

    _header("Recommendations")
    _bullets(report.recommendations)

    _header("Weak skills")
    _bullets(summary.weak_skill_alerts)

    _header("Notifications")
    _bullets([f"[{n.title}] {n.message}" for n in notifications])

    _header("Nudges")
    _bullets(generate_nudges(user, breakdown))

    alerts = get_intervention_alerts(user, now=moment)
    if alerts:
        _header("Alerts")
        for alert in alerts:
            typer.secho(f"  ! {alert}", fg=typer.colors.RED)


if __name__ == "__main__":
    app()
