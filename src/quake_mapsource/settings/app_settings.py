"""
AppSettings dataclass - user defaults for reading and dumping MAP files.

Command-line options override these per invocation.
"""

from __future__ import annotations
import codecs
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict

logger = logging.getLogger(__name__)

DUMP_FORMATS = ("text", "json", "map")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppSettings:
    """
    Defaults for the quake-mapsource command.

    Attributes:
        encoding: Text encoding used to read MAP files
        dump_format: Output format ("text", "json" or "map")
        include_normals: Add derived plane normals to text/json dumps
        float_precision: Significant digits (text) / decimal places (json)
        log_level: Logging level name
        trace: Log every grammar rule attempt at DEBUG level
    """

    encoding: str = "utf-8"
    dump_format: str = "text"
    include_normals: bool = False
    float_precision: int = 6
    log_level: str = "WARNING"
    trace: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """Build settings from a dictionary.

        Unknown keys are ignored. Values of the wrong type or outside the
        allowed choices fall back to the default with a warning.
        """
        defaults = cls()
        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            default = getattr(defaults, f.name)
            if not _valid(f.name, value, default):
                logger.warning("Ignoring invalid setting %s=%r (using %r)", f.name, value, default)
                continue
            values[f.name] = value.upper() if f.name == "log_level" else value
        return replace(defaults, **values)


def _valid(name: str, value: Any, default: Any) -> bool:
    # bool is a subclass of int; keep them apart
    if isinstance(default, bool) or isinstance(value, bool):
        if not (isinstance(default, bool) and isinstance(value, bool)):
            return False
    elif not isinstance(value, type(default)):
        return False
    if name == "dump_format":
        return value in DUMP_FORMATS
    if name == "log_level":
        return value.upper() in LOG_LEVELS
    if name == "float_precision":
        return 0 <= value <= 17
    if name == "encoding":
        return is_known_encoding(value)
    return True


def is_known_encoding(name: str) -> bool:
    """True if Python has a codec registered under this name."""
    try:
        codecs.lookup(name)
    except LookupError:
        return False
    return True
