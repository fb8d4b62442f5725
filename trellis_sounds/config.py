"""
Configuration management for trellis-sounds.

Settings come from defaults, TRELLIS_SOUNDS_* environment variables and,
optionally, a YAML file passed on the command line.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings

from trellis_sounds.exceptions import CacheSetupError

DEFAULT_ARCHIVE_URL = (
    "https://cdn-learn.adafruit.com/assets/assets/000/066/017/original/"
    "sound_packs.zip?1542348728"
)
CACHE_DIR_NAME = ".trellis_sounds"


class Settings(BaseSettings):
    """Application settings."""

    # Cache layout
    cache_dir: Path | None = None
    archive_name: str = "sound_packs.zip"
    extracted_name: str = "sound_packs"

    # Remote archive
    archive_url: str = DEFAULT_ARCHIVE_URL
    request_timeout: float = 60.0
    chunk_size: int = 64 * 1024

    # Directories whose name contains this marker hold packs, they are not packs
    container_marker: str = "packs"

    model_config = {"env_prefix": "TRELLIS_SOUNDS_"}


def load_config(config_path: Path) -> dict[str, Any]:
    """
    Load configuration overrides from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Configuration dictionary (empty for an empty file)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid YAML or not a mapping
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return config


def get_settings(config_path: Path | None = None) -> Settings:
    """
    Get application settings.

    Values from the YAML file, when given, take precedence over environment
    variables and defaults.
    """
    if config_path is None:
        return Settings()
    return Settings(**load_config(config_path))


def resolve_cache_dir(settings: Settings) -> Path:
    """Return the cache root, ~/.trellis_sounds unless configured otherwise.

    Raises:
        CacheSetupError: If no home directory can be determined
    """
    if settings.cache_dir is not None:
        return settings.cache_dir.expanduser()

    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise CacheSetupError("Unable to find home directory!") from e
    return home / CACHE_DIR_NAME
