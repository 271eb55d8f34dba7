"""
quake_mapsource - idTech 1 MAP source parser.

Turns Quake-style .map text into an immutable tree of
Map -> Entity -> Brush -> BrushPlane.

Usage:
    from quake_mapsource import parse_file, plane_normal

    level = parse_file("e1m1.map")
    for brush in level.worldspawn.brushes:
        for plane in brush.planes:
            print(plane.texname, plane_normal(plane))
"""

from .errors import MapSourceError, MapParseError, DegeneratePlaneError, SettingsError
from .map_types import TexParams, BrushPlane, Brush, Entity, Map
from .parsing import parse, parse_file, parse_rule
from .conversion import plane_normal, plane_equation, get_writer

__version__ = "0.1.0"

__all__ = [
    # Errors
    'MapSourceError',
    'MapParseError',
    'DegeneratePlaneError',
    'SettingsError',
    # Model
    'TexParams',
    'BrushPlane',
    'Brush',
    'Entity',
    'Map',
    # Parsing
    'parse',
    'parse_file',
    'parse_rule',
    # Geometry / output
    'plane_normal',
    'plane_equation',
    'get_writer',
]
