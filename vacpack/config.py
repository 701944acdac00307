"""
Configuration settings for the vacuum packaging controller.

Notes on validation:
- This module intentionally avoids raising on import so the CLI and tests can
  run without a .env file. Malformed values fall back to defaults with a
  warning instead of aborting.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Machine configuration
MACHINE_ID = os.getenv("MACHINE_ID", "vacuum-packer-01")

# Default stage durations (milliseconds)
DEFAULT_PREHEAT_DURATION_MS = 2000
DEFAULT_VACUUM_DURATION_MS = 3000
DEFAULT_NITROGEN_FLUSH_DURATION_MS = 1500
DEFAULT_COOLDOWN_DURATION_MS = 2000


def get_duration_ms(key: str, default: int) -> int:
    """
    Read a positive millisecond duration from the environment.

    Args:
        key: Environment variable name
        default: Value used when the variable is missing or invalid

    Returns:
        Duration in milliseconds
    """
    raw: Optional[str] = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default

    try:
        value = int(raw)
    except (ValueError, TypeError):
        logger.warning(f"{key}={raw!r} is not an integer. Defaulting to {default}ms.")
        return default

    if value <= 0:
        logger.warning(f"{key}={value} must be positive. Defaulting to {default}ms.")
        return default
    return value


def load_stage_timings():
    """Build the fixed stage timings from environment overrides."""
    # Imported lazily: step_flow.stages reads the defaults above.
    from vacpack.step_flow.stages import StageTimings

    return StageTimings(
        preheat_ms=get_duration_ms("PREHEAT_DURATION_MS", DEFAULT_PREHEAT_DURATION_MS),
        vacuum_ms=get_duration_ms("VACUUM_DURATION_MS", DEFAULT_VACUUM_DURATION_MS),
        nitrogen_flush_ms=get_duration_ms(
            "NITROGEN_FLUSH_DURATION_MS", DEFAULT_NITROGEN_FLUSH_DURATION_MS
        ),
        cooldown_ms=get_duration_ms("COOLDOWN_DURATION_MS", DEFAULT_COOLDOWN_DURATION_MS),
    )
