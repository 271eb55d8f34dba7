"""
Plane geometry for idTech brush faces.

A BrushPlane stores three points (idTech 1 format). The normal and the
normal + distance form (idTech 4 / brushDef3 style) are derived on demand
and never stored on the model.

Winding convention: n = normalize((r - p) x (q - p)).
"""

from __future__ import annotations
from typing import Tuple

import numpy as np

from ..errors import DegeneratePlaneError
from ..map_types import BrushPlane, Vec3

EPSILON = 1e-6


def _as_vec(v: Vec3) -> np.ndarray:
    return np.asarray(v, dtype=np.float32)


def _to_tuple(v: np.ndarray) -> Vec3:
    # +0.0 clears negative zero
    return (float(v[0]) + 0.0, float(v[1]) + 0.0, float(v[2]) + 0.0)


def normal_from_points(p: Vec3, q: Vec3, r: Vec3) -> Vec3:
    """Unit normal of the plane through p, q, r.

    Raises:
        DegeneratePlaneError: If the points are collinear or coincident.
    """
    pv = _as_vec(p)
    n = np.cross(_as_vec(r) - pv, _as_vec(q) - pv)
    length = float(np.linalg.norm(n))
    if length < EPSILON:
        raise DegeneratePlaneError(
            f"Points {p}, {q}, {r} are collinear; plane normal is undefined")
    return _to_tuple(n / np.float32(length))


def plane_normal(plane: BrushPlane) -> Vec3:
    """Outward unit normal of a brush plane."""
    return normal_from_points(plane.p, plane.q, plane.r)


def plane_equation(plane: BrushPlane) -> Tuple[Vec3, float]:
    """Normal + distance form: every point x on the plane has n . x == dist."""
    n = plane_normal(plane)
    dist = float(np.dot(_as_vec(n), _as_vec(plane.p)))
    return (n, dist)


def is_degenerate(plane: BrushPlane) -> bool:
    try:
        plane_normal(plane)
    except DegeneratePlaneError:
        return True
    return False
