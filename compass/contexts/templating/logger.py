"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from compass.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Optional[Path] = None, resume_path: str = "") -> Path:
    """
    Setup logger for a resume scoring session.

    Args:
        log_dir: Directory for this session (defaults to settings logging.dir)
        resume_path: Resume file shown in the provenance header

    Returns:
        Path to log file

    Example:
        from compass.contexts.templating.logger import setup_templating_logger, _log_info

        log_file = setup_templating_logger(resume_path="resume.yaml")
        _log_info("Scoring resume...")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Resume": resume_path} if resume_path else None,
    )


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_ats_result(resume_id: str, result) -> None:
    """Log an ATS audit summary (score and issue counts) at debug level."""
    _log_debug(
        f"ATS score for resume {resume_id}: {result.score} "
        f"(critical={len(result.issues.critical)}, warnings={len(result.issues.warnings)}, "
        f"suggestions={len(result.issues.suggestions)})"
    )
