"""
Settings persistence layer.

Handles save/load of AppSettings to ~/.config/quake_mapsource/settings.json
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Union

from ..errors import SettingsError
from .app_settings import AppSettings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "settings.json"


def get_config_dir() -> Path:
    """
    Get the directory for storing settings.

    Returns:
        Path to ~/.config/quake_mapsource/ (not created here)
    """
    return Path.home() / ".config" / "quake_mapsource"


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def save_settings(settings: AppSettings, file_path: Optional[Path] = None) -> Path:
    """
    Save settings as JSON.

    Args:
        settings: The AppSettings to save
        file_path: Target file (defaults to the user config location)

    Returns:
        Path to the saved file

    Raises:
        IOError: If the file cannot be written
    """
    file_path = Path(file_path) if file_path is not None else get_settings_path()
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(settings.to_dict(), f, indent=2, ensure_ascii=False)

    logger.info("Saved settings to %s", file_path)
    return file_path


def load_settings_from_path(file_path: Union[str, Path]) -> AppSettings:
    """
    Load settings from an explicit file.

    Args:
        file_path: Path to a settings JSON file

    Returns:
        The loaded AppSettings

    Raises:
        SettingsError: If the file cannot be read or is not a JSON object
    """
    file_path = Path(file_path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SettingsError(f"Cannot load settings from {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {file_path} must contain a JSON object")
    return AppSettings.from_dict(data)


def load_settings() -> AppSettings:
    """
    Load the user's settings.

    Returns:
        Saved settings, or defaults if the file is missing or unreadable
    """
    file_path = get_settings_path()
    if not file_path.exists():
        return AppSettings()

    try:
        return load_settings_from_path(file_path)
    except SettingsError as e:
        logger.warning("%s; using defaults", e)
        return AppSettings()
