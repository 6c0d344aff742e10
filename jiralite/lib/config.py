"""
Configuration loader for jiralite.

Settings come from, in order of precedence: explicit overrides (CLI flags),
the process environment (JIRALITE_* variables), a jiralite.env file, and
built-in defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import envparse

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = "jiralite.env"
DEFAULT_DB_PATH = Path("data") / "db.json"
DEFAULT_LOG_LEVEL = "WARNING"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_PREFIX = "JIRALITE_"


@dataclass
class TrackerConfig:
    """Runtime configuration for the tracker."""
    db_path: Path  # JSON file backing the database
    log_level: str  # One of VALID_LOG_LEVELS


def _normalize_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in VALID_LOG_LEVELS:
        logger.warning(f"Unknown LOG_LEVEL '{value}', using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return level


def load_config(
    env_file: Optional[Path] = None,
    overrides: Optional[dict] = None,
    environ: Optional[dict] = None,
) -> TrackerConfig:
    """Resolve the tracker configuration.

    Args:
        env_file: Env file to read. Defaults to ./jiralite.env, which is
            optional; an explicitly named file must exist.
        overrides: Keys DB_PATH / LOG_LEVEL taking precedence over everything.
            None values are ignored.
        environ: Process environment (defaults to os.environ)

    Raises:
        FileNotFoundError: explicit env_file does not exist
        ValueError: env file has invalid syntax
    """
    environ = os.environ if environ is None else environ

    file_values: dict[str, str] = {}
    base_dir = Path.cwd()
    if env_file is not None:
        file_values = envparse.load_env(env_file)
        base_dir = Path(env_file).resolve().parent
    elif Path(DEFAULT_ENV_FILE).exists():
        file_values = envparse.load_env(Path(DEFAULT_ENV_FILE))

    settings = {
        "DB_PATH": str(DEFAULT_DB_PATH),
        "LOG_LEVEL": DEFAULT_LOG_LEVEL,
    }
    db_from_file = False
    for key in settings:
        if key in file_values:
            settings[key] = file_values[key]
            db_from_file = db_from_file or key == "DB_PATH"
        if ENV_PREFIX + key in environ:
            settings[key] = environ[ENV_PREFIX + key]
            db_from_file = db_from_file and key != "DB_PATH"
        if overrides and overrides.get(key) is not None:
            settings[key] = str(overrides[key])
            db_from_file = db_from_file and key != "DB_PATH"

    db_path = Path(settings["DB_PATH"]).expanduser()
    # Paths in an env file are relative to that file
    if db_from_file and not db_path.is_absolute():
        db_path = base_dir / db_path

    return TrackerConfig(
        db_path=db_path,
        log_level=_normalize_log_level(settings["LOG_LEVEL"]),
    )
