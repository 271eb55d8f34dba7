"""
Output writers for parsed maps.

Each writer serialises a Map into one text representation:
- "map":  idTech 1 MAP source, in exactly the shape the parser accepts
- "text": indented human-readable dump of the tree
- "json": JSON document of the tree

Normals (optional in the dumps) come from plane_math and are never stored.
"""

from __future__ import annotations
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import numpy as np

from ..errors import DegeneratePlaneError
from ..map_types import Brush, BrushPlane, Entity, Map, Vec3
from .plane_math import plane_normal


class MapFormatWriter(ABC):
    """Abstract base for map writers."""

    def __init__(self, include_normals: bool = False, float_precision: int = 6):
        self.include_normals = include_normals
        self.float_precision = float_precision

    @abstractmethod
    def format_name(self) -> str: ...

    @abstractmethod
    def write(self, map_data: Map) -> str:
        """Return the whole map as a string."""
        ...

    def _normal_or_none(self, plane: BrushPlane) -> Optional[Vec3]:
        try:
            return plane_normal(plane)
        except DegeneratePlaneError:
            return None


class MapTextWriter(MapFormatWriter):
    """idTech 1 MAP source writer.

    Format per face:
        ( x1 y1 z1 ) ( x2 y2 z2 ) ( x3 y3 z3 ) TEXTURE offX offY rot scX scY

    Numbers are written positionally (never with an exponent) so the output
    always parses back to the same Map.
    """

    def format_name(self) -> str:
        return "map"

    def write(self, map_data: Map) -> str:
        return "".join(
            self.write_entity(entity, entity_index=i)
            for i, entity in enumerate(map_data.entities)
        )

    def write_plane(self, plane: BrushPlane) -> str:
        tp = plane.texparams
        numbers = (tp.offset[0], tp.offset[1], tp.rotation, tp.scale[0], tp.scale[1])
        return (
            f"{self._point(plane.p)} {self._point(plane.q)} {self._point(plane.r)} "
            f"{plane.texname} "
            + " ".join(_format_number(v) for v in numbers)
        )

    def write_brush(self, brush: Brush, brush_index: int = 0) -> str:
        lines = [f"// brush {brush_index}\n", "{\n"]
        for p in brush.planes:
            lines.append(f"{self.write_plane(p)}\n")
        lines.append("}\n")
        return "".join(lines)

    def write_entity(self, entity: Entity, entity_index: int = 0) -> str:
        lines = [f"// entity {entity_index}\n", "{\n"]
        for k, v in entity.keys.items():
            if '"' in k or '"' in v or not k or not v:
                raise ValueError(f"Property {k!r}: {v!r} cannot be written as a MAP key/value pair")
            lines.append(f'"{k}" "{v}"\n')
        for i, brush in enumerate(entity.brushes):
            lines.append(self.write_brush(brush, brush_index=i))
        lines.append("}\n")
        return "".join(lines)

    def _point(self, v: Vec3) -> str:
        return f"( {_format_number(v[0])} {_format_number(v[1])} {_format_number(v[2])} )"


class TextDumpWriter(MapFormatWriter):
    """Indented, human-readable dump of the map tree."""

    def format_name(self) -> str:
        return "text"

    def write(self, map_data: Map) -> str:
        lines = [
            f"Map: {len(map_data.entities)} entities, "
            f"{map_data.brush_count} brushes, {map_data.plane_count} planes"
        ]
        for i, entity in enumerate(map_data.entities):
            kind = "point" if entity.is_point_entity else "brush"
            lines.append(f"Entity {i} ({entity.classname or '<no classname>'}, {kind} entity)")
            for k, v in entity.keys.items():
                lines.append(f'  "{k}" "{v}"')
            for j, brush in enumerate(entity.brushes):
                lines.append(f"  Brush {j} ({len(brush.planes)} planes)")
                for n, plane in enumerate(brush.planes):
                    lines.append(f"    Plane {n}: {self._plane(plane)}")
        return "\n".join(lines) + "\n"

    def _plane(self, plane: BrushPlane) -> str:
        tp = plane.texparams
        text = (
            f"p={self._vec(plane.p)} q={self._vec(plane.q)} r={self._vec(plane.r)} "
            f"tex={plane.texname} offset={self._vec(tp.offset)} "
            f"rot={self._num(tp.rotation)} scale={self._vec(tp.scale)}"
        )
        if self.include_normals:
            normal = self._normal_or_none(plane)
            text += f" normal={self._vec(normal) if normal is not None else 'degenerate'}"
        return text

    def _num(self, v: float) -> str:
        return f"{v:.{self.float_precision}g}"

    def _vec(self, v) -> str:
        return "(" + ", ".join(self._num(c) for c in v) + ")"


class JsonDumpWriter(MapFormatWriter):
    """JSON dump of the map tree."""

    def format_name(self) -> str:
        return "json"

    def write(self, map_data: Map) -> str:
        return json.dumps(self.to_dict(map_data), indent=2, ensure_ascii=False,
                          allow_nan=False) + "\n"

    def to_dict(self, map_data: Map) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'entities': [
                {
                    'keys': dict(entity.keys),
                    'brushes': [
                        {'planes': [self._plane_dict(p) for p in brush.planes]}
                        for brush in entity.brushes
                    ],
                }
                for entity in map_data.entities
            ]
        }

    def _plane_dict(self, plane: BrushPlane) -> Dict[str, Any]:
        tp = plane.texparams
        data: Dict[str, Any] = {
            'p': self._round(plane.p),
            'q': self._round(plane.q),
            'r': self._round(plane.r),
            'texname': plane.texname,
            'texparams': {
                'offset': self._round(tp.offset),
                'rotation': round(tp.rotation, self.float_precision),
                'scale': self._round(tp.scale),
            },
        }
        if self.include_normals:
            normal = self._normal_or_none(plane)
            data['normal'] = self._round(normal) if normal is not None else None
        return data

    def _round(self, v) -> List[float]:
        return [round(c, self.float_precision) for c in v]


# ---------------------------------------------------------------
# Factory
# ---------------------------------------------------------------

_WRITERS = {
    "map": MapTextWriter,
    "text": TextDumpWriter,
    "json": JsonDumpWriter,
}

WRITER_NAMES = tuple(_WRITERS)


def get_writer(format_name: str, **options) -> MapFormatWriter:
    """Return a writer instance for the given format name.

    Raises ValueError for unknown formats.
    """
    cls = _WRITERS.get(format_name.lower())
    if cls is None:
        raise ValueError(f"Unknown output format '{format_name}'. Available: {list(_WRITERS)}")
    return cls(**options)


# ---------------------------------------------------------------
# Helper
# ---------------------------------------------------------------

def _format_number(v: float) -> str:
    """Shortest positional form of a 32-bit float (``64``, ``-0.5``).

    Raises:
        ValueError: If the value is not finite in 32 bits; MAP text has no
            spelling for it.
    """
    with np.errstate(over="ignore"):
        value = np.float32(v)
    if not np.isfinite(value):
        raise ValueError(f"cannot write non-finite number {v!r} as MAP text")
    text = np.format_float_positional(value, trim='-')
    if text == "-0":
        return "0"
    return text
