"""3D line segment used to carry the cut between two triangles.

The kernel only ever builds segments from plane/triangle crossing points,
so every operation here assumes the points it is handed are (nearly)
collinear with the segment. ``subtract`` verifies that assumption within
``eps``; ``expand_to_point`` does not.
"""
from __future__ import annotations

import numpy as np

from .constants import EPSILON, EPS_TRIM
from .geometry import as_point, normal_from_points

__all__ = ['LineSegment']


class LineSegment:
    """Segment between endpoints ``a`` and ``b``, parametrized as a + t (b - a)."""

    def __init__(self, a=None, b=None):
        self.a = np.zeros(3) if a is None else as_point(a)
        self.b = np.zeros(3) if b is None else as_point(b)

    def set(self, a, b) -> None:
        self.a = as_point(a)
        self.b = as_point(b)

    def copy(self) -> 'LineSegment':
        return LineSegment(self.a, self.b)

    def direction(self) -> np.ndarray:
        return self.b - self.a

    def length(self) -> float:
        return float(np.linalg.norm(self.b - self.a))

    def point_at(self, t: float) -> np.ndarray:
        return self.a + (self.b - self.a) * t

    def project(self, p) -> float:
        """Parametric coordinate of ``p`` projected onto the supporting line."""
        d = self.b - self.a
        dd = float(np.dot(d, d))
        if dd == 0.0:
            return 0.0
        return float(np.dot(np.asarray(p, dtype=np.float64) - self.a, d)) / dd

    def distance_to_line(self, p) -> float:
        p = np.asarray(p, dtype=np.float64)
        d = self.b - self.a
        d_len = float(np.linalg.norm(d))
        if d_len == 0.0:
            return float(np.linalg.norm(p - self.a))
        return float(np.linalg.norm(np.cross(p - self.a, d))) / d_len

    def expand_to_point(self, p) -> None:
        """Grow the segment so it also covers ``p`` (assumed collinear)."""
        p = as_point(p)
        if np.array_equal(self.a, self.b):
            self.b = p
            return
        t = self.project(p)
        if t < 0.0:
            self.a = p
        elif t > 1.0:
            self.b = p

    def subtract(self, other: 'LineSegment', eps: float = EPSILON) -> bool:
        """Shrink this segment to the span it shares with ``other``.

        Returns False, leaving this segment untouched, when ``other`` is not
        on this segment's line within ``eps`` or the shared span is no longer
        than ``eps``. The collinearity test is measured against this
        segment's line only, so ``a.subtract(b)`` and ``b.subtract(a)`` can
        disagree for nearly parallel segments of very different length.
        """
        length = self.length()
        if length <= eps:
            return False
        if self.distance_to_line(other.a) > eps or self.distance_to_line(other.b) > eps:
            return False
        t0, t1 = sorted((self.project(other.a), self.project(other.b)))
        lo = max(0.0, t0)
        hi = min(1.0, t1)
        if (hi - lo) * length <= eps:
            return False
        self.a, self.b = self.point_at(lo), self.point_at(hi)
        return True

    def trim_to_triangle(self, ta, tb, tc, eps: float = EPS_TRIM) -> bool:
        """Clip the segment to the footprint of a coplanar triangle.

        Each edge contributes an inward half-plane (widened outward by
        ``eps``) and the parametric range [0, 1] is cut down against all
        three. Returns False, leaving the segment untouched, when nothing
        of it lies inside the triangle or the triangle is degenerate.
        """
        verts = (np.asarray(ta, dtype=np.float64), np.asarray(tb, dtype=np.float64),
                 np.asarray(tc, dtype=np.float64))
        normal = normal_from_points(*verts)
        if not np.any(normal):
            return False
        d = self.b - self.a
        parallel = EPS_TRIM * float(np.linalg.norm(d))
        lo, hi = 0.0, 1.0
        for i in range(3):
            v0 = verts[i]
            inward = np.cross(normal, verts[(i + 1) % 3] - v0)
            m_len = float(np.linalg.norm(inward))
            if m_len == 0.0:
                return False
            f0 = float(np.dot(inward, self.a - v0)) / m_len
            fd = float(np.dot(inward, d)) / m_len
            if abs(fd) <= parallel:
                if f0 < -eps:
                    return False
                continue
            t = (-eps - f0) / fd
            if fd > 0.0:
                lo = max(lo, t)
            else:
                hi = min(hi, t)
            if lo > hi:
                return False
        self.a, self.b = self.point_at(lo), self.point_at(hi)
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineSegment):
            return NotImplemented
        return np.array_equal(self.a, other.a) and np.array_equal(self.b, other.b)

    __hash__ = None

    def __repr__(self) -> str:
        return f"LineSegment(a={self.a.tolist()}, b={self.b.tolist()})"
