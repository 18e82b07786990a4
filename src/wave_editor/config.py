"""Runtime settings read from the environment (and a .env file via the CLI)."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

STORE_PATH_ENV = "WAVE_EDITOR_STORE"
LOG_LEVEL_ENV = "WAVE_EDITOR_LOG_LEVEL"

DEFAULT_STORE_PATH = Path.home() / ".config" / "wave-editor" / "registry.json"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""
    store_path: Path
    log_level: str


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to ``os.environ``)

    Returns:
        Settings with defaults applied for unset variables
    """
    env = os.environ if environ is None else environ
    store_path = env.get(STORE_PATH_ENV) or DEFAULT_STORE_PATH
    log_level = (env.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    return Settings(store_path=Path(store_path).expanduser(), log_level=log_level)
