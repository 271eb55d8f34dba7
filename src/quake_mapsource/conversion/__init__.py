"""
Derived geometry and output formats for parsed maps.
"""

from .plane_math import (
    normal_from_points,
    plane_normal,
    plane_equation,
    is_degenerate,
)
from .format_writers import (
    MapFormatWriter,
    MapTextWriter,
    TextDumpWriter,
    JsonDumpWriter,
    WRITER_NAMES,
    get_writer,
)

__all__ = [
    'normal_from_points',
    'plane_normal',
    'plane_equation',
    'is_degenerate',
    'MapFormatWriter',
    'MapTextWriter',
    'TextDumpWriter',
    'JsonDumpWriter',
    'WRITER_NAMES',
    'get_writer',
]
