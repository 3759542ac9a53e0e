"""
Settings loading for COMPASS.

Packaged defaults live in compass/configs/settings.yaml. A deployment can point
COMPASS_SETTINGS_PATH (environment or .env file) at a YAML file with the same
layout; its keys are merged over the defaults.

Examples:
    >>> settings = get_settings()
    >>> settings.notifications.retention_days
    7
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "configs" / "settings.yaml"


def _override_path() -> Optional[Path]:
    value = os.getenv("COMPASS_SETTINGS_PATH")
    return Path(value) if value else None


def load_settings(config_path: Optional[Path] = None) -> DictConfig:
    """
    Load packaged defaults and merge an optional override file on top.

    Args:
        config_path: Override YAML (defaults to COMPASS_SETTINGS_PATH, if set)

    Returns:
        Read-only merged DictConfig

    Raises:
        FileNotFoundError: If an override path is given but does not exist
    """
    settings = OmegaConf.load(DEFAULT_SETTINGS_PATH)

    if config_path is None:
        config_path = _override_path()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Settings override not found: {config_path}")
        settings = OmegaConf.merge(settings, OmegaConf.load(config_path))

    OmegaConf.set_readonly(settings, True)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> DictConfig:
    """Process-wide settings, loaded once."""
    return load_settings()


def reload_settings() -> DictConfig:
    """Drop the cached settings and load them again (e.g., after changing the env)."""
    get_settings.cache_clear()
    return get_settings()
