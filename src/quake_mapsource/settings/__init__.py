"""
User settings for the quake-mapsource command.

Usage:
    from quake_mapsource.settings import load_settings, save_settings

    settings = load_settings()  # defaults if nothing saved yet
    save_settings(replace(settings, include_normals=True))
"""

from .app_settings import AppSettings, DUMP_FORMATS, LOG_LEVELS, is_known_encoding
from .settings_storage import (
    get_config_dir,
    get_settings_path,
    save_settings,
    load_settings,
    load_settings_from_path,
)

__all__ = [
    'AppSettings',
    'DUMP_FORMATS',
    'LOG_LEVELS',
    'is_known_encoding',
    'get_config_dir',
    'get_settings_path',
    'save_settings',
    'load_settings',
    'load_settings_from_path',
]
