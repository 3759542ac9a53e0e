"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from compass.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[intake]"


def setup_intake_logger(log_dir: Optional[Path] = None, source: str = "") -> Path:
    """
    Setup logger for an intake session.

    Args:
        log_dir: Directory for this session (defaults to settings logging.dir)
        source: Job description source shown in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="intake",
        log_dir=log_dir,
        extra_provenance={"Job description": source} if source else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [intake] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_analysis_result(title: str, analysis) -> None:
    """
    Log a one-line summary of a JDAnalysis at debug level.

    Args:
        title: Job title the description belongs to
        analysis: JDAnalysis produced by the analyzer
    """
    _log_debug(
        f"Analyzed '{title}': {len(analysis.required_skills)} required, "
        f"{len(analysis.preferred_skills)} preferred, "
        f"difficulty={analysis.difficulty_rating.value}, "
        f"prep={analysis.estimated_preparation_time}h"
    )
    if not analysis.required_skills:
        _log_info(f"No required skills detected for '{title}'")
