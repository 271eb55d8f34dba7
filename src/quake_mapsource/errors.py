"""
Exception types raised by quake_mapsource.

- MapSourceError: Base class for every error raised by this package
- MapParseError: The MAP text does not match the grammar
- DegeneratePlaneError: A brush plane's points do not span a plane
- SettingsError: A settings file could not be loaded

I/O errors (OSError, UnicodeDecodeError) are never wrapped.
"""

from typing import Iterable, Tuple


class MapSourceError(Exception):
    """Base class for quake_mapsource errors."""


class MapParseError(MapSourceError):
    """Raised when MAP source text fails to parse.

    The position is the furthest point the parser reached before every
    alternative was exhausted.

    Attributes:
        line: 1-based line number
        column: 1-based column number
        offset: 0-based character offset into the source
        expected: Sorted descriptions of the tokens accepted at that position
    """

    def __init__(self, line: int, column: int, offset: int, expected: Iterable[str]):
        self.line = line
        self.column = column
        self.offset = offset
        self.expected: Tuple[str, ...] = tuple(sorted(set(expected)))
        super().__init__(self.format())

    def format(self) -> str:
        """Format as ``error at LINE:COL: expected one of ...``."""
        if not self.expected:
            wanted = "nothing"
        elif len(self.expected) == 1:
            wanted = self.expected[0]
        else:
            wanted = "one of " + ", ".join(self.expected)
        return f"error at {self.line}:{self.column}: expected {wanted}"


class DegeneratePlaneError(MapSourceError, ValueError):
    """Raised when a plane's three points are collinear or coincident."""


class SettingsError(MapSourceError):
    """Raised when an explicitly requested settings file is unusable."""
