"""
Map Types for parsed idTech 1 MAP sources

This module defines the typed tree produced by the MAP parser:

    Map -> Entity -> Brush -> BrushPlane (+ TexParams)

Every node is a frozen dataclass and every sequence is a tuple, so a parsed
map is immutable once built. Ownership is strictly tree-shaped: a node is
only ever referenced by its parent.

Coordinates follow the idTech convention:
- X: Right/Left
- Y: Forward/Back
- Z: Up/Down
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

import numpy as np

Vec2 = Tuple[float, float]
Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class TexParams:
    """Texture alignment for one brush face (idTech 1 style).

    Passed through unchanged; no texture lookup happens here.
    """
    offset: Vec2 = (0.0, 0.0)
    rotation: float = 0.0  # degrees
    scale: Vec2 = (1.0, 1.0)


@dataclass(frozen=True)
class BrushPlane:
    """
    One face of a brush, defined by three points.

    The points are expected to be non-collinear; their winding order fixes
    which way the face normal points (see conversion.plane_math). The parser
    does not check this.
    """
    p: Vec3
    q: Vec3
    r: Vec3
    texname: str
    texparams: TexParams = field(default_factory=TexParams)

    @property
    def points(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.p, self.q, self.r)


@dataclass(frozen=True)
class Brush:
    """
    A convex solid: the intersection of the half-spaces bounded by its planes.

    Planes keep input order. Convexity is not checked.
    """
    planes: Tuple[BrushPlane, ...] = ()


@dataclass(frozen=True)
class Entity:
    """
    A map object with string properties and optional brushes.

    Entities with no brushes are point entities (lights, spawns, monsters);
    entities with brushes are brush entities (worldspawn, doors, triggers).

    The keys are copied into a read-only mapping on construction.
    """
    keys: Mapping[str, str] = field(default_factory=dict)
    brushes: Tuple[Brush, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "keys", MappingProxyType(dict(self.keys)))

    def __hash__(self) -> int:
        return hash((frozenset(self.keys.items()), self.brushes))

    @property
    def classname(self) -> Optional[str]:
        return self.keys.get("classname")

    @property
    def is_point_entity(self) -> bool:
        return not self.brushes

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a property value by exact key name."""
        return self.keys.get(key, default)

    @property
    def origin(self) -> Optional[Vec3]:
        """The "origin" property as a float triple, or None if absent.

        Raises:
            ValueError: If the property is not three space-separated numbers.
        """
        raw = self.keys.get("origin")
        if raw is None:
            return None
        parts = raw.split()
        if len(parts) != 3:
            raise ValueError(f"origin must have three components, got {raw!r}")
        x, y, z = (float(v) for v in parts)
        return (x, y, z)


@dataclass(frozen=True)
class Map:
    """A whole MAP document: entities in file order."""
    entities: Tuple[Entity, ...] = ()

    def __iter__(self) -> Iterator[Entity]:
        return iter(self.entities)

    def __len__(self) -> int:
        return len(self.entities)

    @property
    def worldspawn(self) -> Optional[Entity]:
        return next((e for e in self.entities if e.classname == "worldspawn"), None)

    def find_by_classname(self, classname: str) -> Tuple[Entity, ...]:
        return tuple(e for e in self.entities if e.classname == classname)

    @property
    def brush_count(self) -> int:
        return sum(len(e.brushes) for e in self.entities)

    @property
    def plane_count(self) -> int:
        return sum(len(b.planes) for e in self.entities for b in e.brushes)

    def bounds(self) -> Optional[Tuple[Vec3, Vec3]]:
        """
        Axis-aligned bounds of every plane point in the map.

        Returns:
            (min_point, max_point), or None if the map has no brush geometry.
        """
        points = [
            point
            for entity in self.entities
            for brush in entity.brushes
            for plane in brush.planes
            for point in plane.points
        ]
        if not points:
            return None
        arr = np.asarray(points, dtype=np.float32)
        lo = arr.min(axis=0)
        hi = arr.max(axis=0)
        return (
            (float(lo[0]), float(lo[1]), float(lo[2])),
            (float(hi[0]), float(hi[1]), float(hi[2])),
        )
