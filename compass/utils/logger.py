"""
Generic loguru setup shared by all contexts.

Library code never configures sinks on import; command-line entry points call
setup_logger() once per session. Context-specific wrappers live in
contexts/{context}/logger.py and add a "[context]" prefix to every record.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from compass.utils.settings import get_settings

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def resolve_log_dir(log_dir: Optional[Path] = None) -> Path:
    """Return log_dir, falling back to the configured logging.dir."""
    if log_dir is not None:
        return Path(log_dir)
    return Path(get_settings().logging.dir)


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[dict] = None,
    console_level: Optional[str] = None,
) -> Path:
    """
    Configure loguru for one command-line session of a context.

    Sets up dual output: a DEBUG file sink under log_dir and a colorized
    console sink at the configured level. Logs a provenance header
    (script, command, working directory, Python version) first.

    Args:
        context_name: Context identifier (e.g., "intake", "flow", "coach")
        log_dir: Directory for this session (defaults to settings logging.dir)
        extra_provenance: Additional key-value pairs for the provenance header
        console_level: Console threshold (defaults to settings logging.level)

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="flow",
            extra_provenance={"Resume": "resume.yaml"},
        )
    """
    log_dir = resolve_log_dir(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(
        sys.stdout,
        format=CONSOLE_FORMAT,
        level=console_level or get_settings().logging.level,
        colorize=True,
    )

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[dict] = None) -> None:
    """
    Log execution provenance to the current logger.

    Args:
        extra_context: Additional key-value pairs to log after the standard fields
    """
    logger.debug("=" * 80)
    logger.debug(f"Script: {sys.argv[0]}")
    logger.debug(f"Command: {' '.join(sys.argv)}")
    logger.debug(f"Working directory: {Path.cwd()}")
    logger.debug(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.debug(f"{key}: {value}")

    logger.debug("=" * 80)
