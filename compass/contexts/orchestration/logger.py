"""
Orchestration context logger.

Provides logging interface for the automation flow with automatic [flow] prefix.
All orchestration modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from compass.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[flow]"


def setup_flow_logger(log_dir: Optional[Path] = None, job_id: str = "", resume_id: str = "") -> Path:
    """
    Setup logger for an automation flow run.

    Args:
        log_dir: Directory for this session (defaults to settings logging.dir)
        job_id: Job being processed
        resume_id: Resume being optimized

    Returns:
        Path to log file
    """
    provenance = {}
    if job_id:
        provenance["Job"] = job_id
    if resume_id:
        provenance["Resume"] = resume_id
    return _setup_logger(context_name="flow", log_dir=log_dir, extra_provenance=provenance or None)


def _log_info(message: str) -> None:
    """Log info message with [flow] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [flow] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_step(number: int, description: str) -> None:
    """Log a numbered flow step at debug level."""
    _log_debug(f"Step {number}: {description}")
