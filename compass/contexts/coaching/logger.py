"""
Coaching context logger.

Provides logging interface for coaching context with automatic [coach] prefix.
All coaching modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from compass.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[coach]"


def setup_coaching_logger(log_dir: Optional[Path] = None, user_id: str = "") -> Path:
    """
    Setup logger for a dashboard/coaching session.

    Args:
        log_dir: Directory for this session (defaults to settings logging.dir)
        user_id: User shown in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="coach",
        log_dir=log_dir,
        extra_provenance={"User": user_id} if user_id else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [coach] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [coach] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_breakdown(user_id: str, breakdown) -> None:
    """Log a readiness breakdown on one line at debug level."""
    _log_debug(
        f"Readiness for {user_id}: overall={breakdown.overall_score} "
        f"(match={breakdown.job_match_quality}, alignment={breakdown.jd_skill_alignment}, "
        f"ats={breakdown.resume_ats_score}, progress={breakdown.application_progress}, "
        f"practice={breakdown.practice_completion})"
    )
