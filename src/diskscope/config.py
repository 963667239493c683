"""User settings for diskscope.

Settings live in a JSON file under the platform config directory. A missing
file means defaults; a file that exists but does not parse or validate is an
error, so a typo never silently resets the user's choices.
"""

import json
import os
from pathlib import Path
from typing import Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from diskscope.cache import CACHE_TTL
from diskscope.errors import ConfigError
from diskscope.models import DEFAULT_MIN_SIZE_BYTES, FilterConfig
from diskscope.sizing import DEFAULT_MAX_DEPTH

APP_NAME = "diskscope"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "DISKSCOPE_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

AUTO_REFRESH_INTERVAL = 30  # seconds


class Settings(BaseModel):
    """Tunable defaults for a browsing session."""

    cache_ttl: float = Field(default=CACHE_TTL, gt=0, description="Seconds a scan stays fresh")
    min_size_bytes: int = Field(
        default=DEFAULT_MIN_SIZE_BYTES,
        ge=0,
        description="Default minimum entry size shown",
    )
    show_hidden: bool = Field(default=False, description="Show dot-prefixed entries by default")
    sort_by_size: bool = Field(default=True, description="Sort by size rather than name")
    auto_refresh_interval: float = Field(
        default=AUTO_REFRESH_INTERVAL,
        gt=0,
        description="Seconds between automatic rescans when auto refresh is on",
    )
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0, description="Recursion limit for sizing")

    def filter_config(self) -> FilterConfig:
        """Initial filter configuration for a new session."""
        return FilterConfig(
            min_size_bytes=self.min_size_bytes,
            show_hidden=self.show_hidden,
            sort_by_size=self.sort_by_size,
        )


def config_path() -> Path:
    """Settings file location, honouring the DISKSCOPE_CONFIG override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Load settings from disk.

    Args:
        path: Settings file (defaults to config_path())

    Returns:
        Settings, with defaults for anything the file leaves out

    Raises:
        ConfigError: if the file is unreadable, not JSON, or fails validation
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read settings from {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Write settings as pretty-printed JSON and return the path used."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(), indent=2) + "\n", encoding="utf-8")
    return path
