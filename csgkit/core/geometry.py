"""Geometry primitives for the CSG kernel.

Points and vectors are plain float64 numpy arrays of shape (3,). Plane
normals produced here are NOT normalized: ``normal_from_points`` returns the
raw cross product of two edge vectors, whose length is twice the triangle's
area. Plane offsets ``w`` and signed distances inherit that scale.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

import numpy as np

from .constants import EPSILON

__all__ = [
    'Classification', 'as_point', 'normal_from_points', 'plane_from_points',
    'distance_to_plane_signed', 'area_of_triangle', 'area_of_triangle_squared',
    'classify_point_with_plane', 'split_line_segment_with_plane',
    'is_point_in_triangle',
]


class Classification(Enum):
    """Position of a point or triangle relative to a reference plane."""
    UNDEFINED = 'undefined'
    FRONT = 'front'
    BACK = 'back'
    COPLANAR = 'coplanar'
    SPANNING = 'spanning'

    def flipped(self) -> 'Classification':
        if self is Classification.FRONT:
            return Classification.BACK
        if self is Classification.BACK:
            return Classification.FRONT
        return self


def as_point(p) -> np.ndarray:
    """Return a fresh float64 copy of ``p`` as a finite 3-vector.

    Raises ValueError for anything that is not three finite numbers.
    """
    arr = np.array(p, dtype=np.float64)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3D point, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"point has non-finite coordinates: {arr}")
    return arr


def normal_from_points(a, b, c) -> np.ndarray:
    """Un-normalized normal of triangle (a, b, c); counter-clockwise is positive."""
    a = np.asarray(a, dtype=np.float64)
    return np.cross(np.asarray(b, dtype=np.float64) - a, np.asarray(c, dtype=np.float64) - a)


def plane_from_points(a, b, c) -> Tuple[np.ndarray, float]:
    """Return ``(normal, w)`` with ``normal . p == w`` for every p on the plane."""
    n = normal_from_points(a, b, c)
    return n, float(np.dot(n, a))


def distance_to_plane_signed(p, plane_point, normal) -> float:
    """Signed distance of ``p`` along ``normal`` (scaled by its length)."""
    return float(np.dot(normal, np.asarray(p, dtype=np.float64) - np.asarray(plane_point, dtype=np.float64)))


def area_of_triangle_squared(a, b, c) -> float:
    n = normal_from_points(a, b, c)
    return 0.25 * float(np.dot(n, n))


def area_of_triangle(a, b, c) -> float:
    return 0.5 * float(np.linalg.norm(normal_from_points(a, b, c)))


def classify_point_with_plane(p, normal, w, eps: float = EPSILON) -> Classification:
    """Classify ``p`` as FRONT, BACK or COPLANAR against plane ``normal . x = w``."""
    d = float(np.dot(normal, p)) - w
    if d > eps:
        return Classification.FRONT
    if d < -eps:
        return Classification.BACK
    return Classification.COPLANAR


def split_line_segment_with_plane(p0, p1, normal, w, eps: float = EPSILON) -> Optional[np.ndarray]:
    """Return the point where segment p0-p1 meets the plane, or None.

    A crossing is reported whenever the two endpoints classify differently.
    An endpoint lying on the plane is returned as-is, so a triangle vertex
    sitting on the plane shows up as an intersection point of its edges.
    """
    c0 = classify_point_with_plane(p0, normal, w, eps)
    c1 = classify_point_with_plane(p1, normal, w, eps)
    if c0 is c1:
        return None
    if c0 is Classification.COPLANAR:
        return np.array(p0, dtype=np.float64)
    if c1 is Classification.COPLANAR:
        return np.array(p1, dtype=np.float64)
    # opposite sides: d0 and d1 differ in sign by more than 2*eps
    d0 = float(np.dot(normal, p0)) - w
    d1 = float(np.dot(normal, p1)) - w
    t = d0 / (d0 - d1)
    p0 = np.asarray(p0, dtype=np.float64)
    return p0 + (np.asarray(p1, dtype=np.float64) - p0) * t


def is_point_in_triangle(p, a, b, c, normal=None, eps: float = 0.0) -> bool:
    """Edge-sign membership test for a point lying in the triangle's plane.

    ``normal`` fixes the orientation (defaults to the triangle's own). ``eps``
    widens every edge outward by that distance, which keeps hits on shared
    edges from slipping between neighbouring triangles.
    """
    verts = (np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64),
             np.asarray(c, dtype=np.float64))
    n = normal_from_points(*verts) if normal is None else np.asarray(normal, dtype=np.float64)
    n_len = float(np.linalg.norm(n))
    if n_len == 0.0:
        return False
    p = np.asarray(p, dtype=np.float64)
    for i in range(3):
        v0 = verts[i]
        edge = verts[(i + 1) % 3] - v0
        e_len = float(np.linalg.norm(edge))
        if e_len == 0.0:
            return False
        side = float(np.dot(np.cross(edge, p - v0), n)) / (n_len * e_len)
        if side < -eps:
            return False
    return True
