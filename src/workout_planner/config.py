"""Runtime configuration for workout-planner."""

import logging
import os
from pathlib import Path

# Default data directory (overridden by WORKOUT_PLANNER_HOME)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"

DEFAULT_REST_SECONDS = 60

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_data_dir() -> Path:
    """Get the data directory path."""
    home = os.environ.get("WORKOUT_PLANNER_HOME")
    if home:
        return Path(home).expanduser()
    return DEFAULT_DATA_DIR


def get_log_level(verbose: bool = False) -> int:
    """Resolve the log level from the CLI flag or environment."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get("WORKOUT_PLANNER_LOG_LEVEL", "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI use."""
    logging.basicConfig(format=LOG_FORMAT, level=get_log_level(verbose))
