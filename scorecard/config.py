"""
Central configuration for the scorecard engine.

Configuration is read from environment variables so the host application (or a
`.env` file loaded by the CLI) can point the engine at its own band profile:
  - SCORECARD_CONFIG_DIR (default: <repo>/config)
  - SCORECARD_LOG_LEVEL (default: INFO)
"""

import os
from pathlib import Path

DEFAULT_LOG_LEVEL = "INFO"


def get_config_dir() -> Path:
    """
    Get the directory holding YAML configuration files.

    Uses SCORECARD_CONFIG_DIR environment variable if set, otherwise defaults
    to the repository's config/ directory.

    Returns:
        Path to config directory
    """
    env_path = os.environ.get("SCORECARD_CONFIG_DIR")
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path(__file__).parent.parent / "config"


def get_log_level() -> str:
    """Get the configured log level name (DEBUG, INFO, WARNING, ERROR)."""
    return os.environ.get("SCORECARD_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
