"""
Shared utilities for COMPASS.

Common functionality used across contexts:
- Text matching and rounding helpers
- Timestamps
- Settings (OmegaConf + dotenv)
- Loguru session setup
"""

from compass.utils.settings import get_settings
from compass.utils.timestamp import now, parse_timestamp

__all__ = ["get_settings", "now", "parse_timestamp"]
