"""Plane-classified triangle and the pairwise subdivision primitive.

``Triangle.split`` cuts one triangle along the segment where it crosses
another, so the intersection curve becomes an explicit edge of the result.
Everything a BSP-style boolean does per triangle pair goes through here:

1. classify the triangle against the other's plane,
2. intersect each triangle with the other's plane (0-2 boundary points),
3. overlap the two resulting segments,
4. insert both overlap endpoints, fanning the triangle around each.

Geometric outcomes are reported through return values. The rare branches
(reverse overlap, unsplit fallback) are visible in :class:`IntersectionResult`
and :class:`SplitResult` instead of being printed.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

import numpy as np

from .constants import EPSILON, EPS_PARALLEL
from .geometry import (
    Classification, area_of_triangle, area_of_triangle_squared, as_point,
    classify_point_with_plane, distance_to_plane_signed, is_point_in_triangle,
    normal_from_points, split_line_segment_with_plane,
)
from .logging_utils import get_logger
from .segment import LineSegment

logger = get_logger('csgkit.triangle')

__all__ = [
    'Triangle', 'IntersectionStatus', 'IntersectionResult', 'SplitPath', 'SplitResult',
]


class IntersectionStatus(Enum):
    PRIMARY = 'primary'                    # first segment subtracted the second
    REVERSE_FALLBACK = 'reverse_fallback'  # only the symmetric subtraction worked
    DEGENERATE = 'degenerate'              # a plane crossing gave fewer than two points
    NO_OVERLAP = 'no_overlap'


@dataclass
class IntersectionResult:
    status: IntersectionStatus
    segment: Optional[LineSegment] = None

    @property
    def ok(self) -> bool:
        return self.segment is not None


class SplitPath(Enum):
    UNAFFECTED = 'unaffected'
    SPLIT = 'split'
    UNSPLIT_FALLBACK = 'unsplit_fallback'


@dataclass
class SplitResult:
    """Outcome of subdividing one triangle.

    Attributes
    ----------
    triangles : list of Triangle
        The pieces; a single unchanged copy when nothing was cut.
    path : SplitPath
    retries : int
        Sub-triangles where inserting the trimmed segment's far endpoint was
        a no-op and the near endpoint was inserted instead.
    intersection : IntersectionResult or None
        Set by ``Triangle.split_detailed`` when an overlap was computed.
    """
    triangles: List['Triangle']
    path: SplitPath
    retries: int = 0
    intersection: Optional[IntersectionResult] = None


class Triangle:
    """Triangle with its supporting plane and a classification tag.

    ``normal`` is the raw cross product ``(b - a) x (c - a)`` and is not
    normalized: its length is twice the area. ``w = normal . a``. Both are
    recomputed whenever the vertices change through :meth:`set`.

    ``classification`` only means something relative to the plane last
    passed to :meth:`classify_with_plane`; subdivision hands it down to the
    children explicitly.
    """

    def __init__(self, a=None, b=None, c=None, classification: Classification = Classification.UNDEFINED):
        self.classification = classification
        if a is None and b is None and c is None:
            self.a = self.b = self.c = None
            self.normal = None
            self.w = None
        else:
            self.set(a, b, c)

    # ------------------------------------------------------------------
    # vertex data
    # ------------------------------------------------------------------
    def set(self, a, b, c) -> None:
        self.a = as_point(a)
        self.b = as_point(b)
        self.c = as_point(c)
        self.calc_normal()

    def calc_normal(self) -> None:
        self.normal = normal_from_points(self.a, self.b, self.c)
        self.w = float(np.dot(self.normal, self.a))

    def _require_geometry(self) -> None:
        if self.normal is None:
            raise ValueError("triangle geometry is unset")

    @property
    def is_set(self) -> bool:
        return self.normal is not None

    @property
    def vertices(self) -> np.ndarray:
        self._require_geometry()
        return np.vstack((self.a, self.b, self.c))

    def __getitem__(self, i: int) -> np.ndarray:
        return (self.a, self.b, self.c)[i]

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.a, self.b, self.c))

    def __len__(self) -> int:
        return 3

    def copy(self) -> 'Triangle':
        if not self.is_set:
            return Triangle(classification=self.classification)
        return Triangle(self.a, self.b, self.c, classification=self.classification)

    def flip(self) -> None:
        """Reverse winding in place; FRONT and BACK swap."""
        self._require_geometry()
        self.b, self.c = self.c, self.b
        self.normal = -self.normal
        self.w = -self.w
        self.classification = self.classification.flipped()

    def flipped(self) -> 'Triangle':
        t = self.copy()
        t.flip()
        return t

    def center(self) -> np.ndarray:
        self._require_geometry()
        return (self.a + self.b + self.c) / 3.0

    def area(self) -> float:
        self._require_geometry()
        return area_of_triangle(self.a, self.b, self.c)

    def area_squared(self) -> float:
        self._require_geometry()
        return area_of_triangle_squared(self.a, self.b, self.c)

    def unit_normal(self) -> Optional[np.ndarray]:
        """Direction-only normal, or None for a degenerate triangle."""
        self._require_geometry()
        n_len = float(np.linalg.norm(self.normal))
        if n_len == 0.0:
            return None
        return self.normal / n_len

    def edges(self) -> List[LineSegment]:
        self._require_geometry()
        return [LineSegment(self.a, self.b), LineSegment(self.b, self.c), LineSegment(self.c, self.a)]

    # ------------------------------------------------------------------
    # classification
    # ------------------------------------------------------------------
    def get_classification(self, plane_normal, plane_w: float, eps: float = EPSILON) -> Classification:
        """Classify against a plane without touching ``self.classification``."""
        self._require_geometry()
        front = back = 0
        for v in self:
            side = classify_point_with_plane(v, plane_normal, plane_w, eps)
            if side is Classification.FRONT:
                front += 1
            elif side is Classification.BACK:
                back += 1
        if front and back:
            return Classification.SPANNING
        if back:
            return Classification.BACK
        if front:
            return Classification.FRONT
        return Classification.COPLANAR

    def classify_with_plane(self, plane_normal, plane_w: float, eps: float = EPSILON) -> Classification:
        self.classification = self.get_classification(plane_normal, plane_w, eps)
        return self.classification

    # ------------------------------------------------------------------
    # intersection
    # ------------------------------------------------------------------
    def intersect_with_plane(self, plane_normal, plane_w: float, eps: float = EPSILON) -> List[np.ndarray]:
        """Points where the boundary crosses the plane, in edge order.

        A SPANNING triangle yields exactly two points. A vertex on the plane
        is reported once even though both of its edges touch it. FRONT and
        BACK triangles yield none, even when a vertex or an edge touches the
        plane. COPLANAR triangles must be handled by the caller.
        """
        self._require_geometry()
        if self.get_classification(plane_normal, plane_w, eps) in (Classification.FRONT, Classification.BACK):
            return []
        points: List[np.ndarray] = []
        verts = (self.a, self.b, self.c)
        for i in range(3):
            p = split_line_segment_with_plane(verts[i], verts[(i + 1) % 3], plane_normal, plane_w, eps)
            if p is None:
                continue
            if any(float(np.linalg.norm(p - q)) <= eps for q in points):
                continue
            points.append(p)
        return points

    def get_intersection(self, other: 'Triangle', eps: float = EPSILON) -> IntersectionResult:
        """Overlap of this triangle's and ``other``'s cut through each other's plane."""
        self._require_geometry()
        other._require_geometry()
        i0 = self.intersect_with_plane(other.normal, other.w, eps)
        i1 = other.intersect_with_plane(self.normal, self.w, eps)
        if len(i0) < 2 or len(i1) < 2:
            logger.debug('get_intersection: degenerate plane crossing (%d, %d points)', len(i0), len(i1))
            return IntersectionResult(IntersectionStatus.DEGENERATE)

        l0 = LineSegment(i0[0], i0[1])
        l1 = LineSegment(i1[0], i1[1])
        for p in i0[2:]:
            l0.expand_to_point(p)
        for p in i1[2:]:
            l1.expand_to_point(p)

        if l0.subtract(l1, eps):
            return IntersectionResult(IntersectionStatus.PRIMARY, l0)
        # Both segments sit on the line shared by the two planes, so this only
        # differs from the first attempt when rounding bends one of them. No
        # triangle pair is known to reach it; the tests force it by patching
        # intersect_with_plane.
        if l1.subtract(l0, eps):
            logger.debug('get_intersection: overlap found only by reverse subtraction')
            return IntersectionResult(IntersectionStatus.REVERSE_FALLBACK, l1)
        return IntersectionResult(IntersectionStatus.NO_OVERLAP)

    def intersect_ray(self, origin, direction, eps: Optional[float] = None) -> Optional[np.ndarray]:
        """Hit point of the ray ``origin + t * direction`` (t >= 0), or None.

        ``eps`` widens the point-in-triangle test so hits on an edge shared
        by two triangles are not lost.
        """
        self._require_geometry()
        origin = as_point(origin)
        direction = as_point(direction)
        n_len = float(np.linalg.norm(self.normal))
        d_len = float(np.linalg.norm(direction))
        vn = float(np.dot(direction, self.normal))
        if abs(vn) <= EPS_PARALLEL * n_len * d_len:
            return None
        distance = -float(np.dot(origin - self.a, self.normal)) / vn
        if distance < 0.0:
            return None
        hit = origin + direction * distance
        if is_point_in_triangle(hit, self.a, self.b, self.c, self.normal, 0.0 if eps is None else eps):
            return hit
        return None

    # ------------------------------------------------------------------
    # subdivision
    # ------------------------------------------------------------------
    def insert(self, point, eps: float = EPSILON,
               classification: Optional[Classification] = None) -> List['Triangle']:
        """Fan-subdivide around ``point``.

        Returns ``[copy of self]`` when the point is off the plane by more
        than ``eps`` or coincides with a vertex. Otherwise returns the fan
        triangles ``(v_i, v_i+1, point)`` whose squared area exceeds ``eps``,
        each tagged with ``classification`` (the parent's tag by default).
        The point is expected to lie inside the footprint.
        """
        self._require_geometry()
        p = as_point(point)
        if abs(distance_to_plane_signed(p, self.a, self.normal)) > eps:
            return [self.copy()]
        verts = (self.a, self.b, self.c)
        if any(float(np.linalg.norm(p - v)) <= eps for v in verts):
            return [self.copy()]

        inherited = self.classification if classification is None else classification
        triangles = []
        for i in range(3):
            t = Triangle(verts[i], verts[(i + 1) % 3], p, classification=inherited)
            if t.area_squared() > eps:
                triangles.append(t)
        if not triangles:
            return [self.copy()]
        return triangles

    def split_with_coplanar_segment(self, segment, b=None, eps: float = EPSILON) -> SplitResult:
        """Subdivide so that ``segment`` (lying in this plane) becomes an edge.

        ``segment`` may be a :class:`LineSegment` or, together with ``b``,
        its first endpoint. The part of the segment outside the triangle is
        ignored.
        """
        self._require_geometry()
        segment = LineSegment(segment, b) if b is not None else segment.copy()
        if not segment.trim_to_triangle(self.a, self.b, self.c):
            return SplitResult([self.copy()], SplitPath.UNAFFECTED)

        inherited = self.classification
        first_pass = self.insert(segment.a, eps, inherited)
        # Each piece only sees the part of the segment inside it, so the far
        # endpoint inserted below is always within that piece.
        triangles: List[Triangle] = []
        retries = 0
        for tri in first_pass:
            trimmed = segment.copy()
            if not trimmed.trim_to_triangle(tri.a, tri.b, tri.c):
                triangles.append(tri)
                continue
            subd = tri.insert(trimmed.b, eps, inherited)
            if len(subd) == 1:
                retries += 1
                subd = tri.insert(trimmed.a, eps, inherited)
            triangles.extend(subd)

        # insert never returns an empty list, so this only guards against a
        # future change there
        if not triangles:
            logger.debug('split_with_coplanar_segment: no pieces produced, keeping triangle unsplit')
            return SplitResult([self.copy()], SplitPath.UNSPLIT_FALLBACK, retries)
        path = SplitPath.SPLIT if len(triangles) > 1 else SplitPath.UNAFFECTED
        return SplitResult(triangles, path, retries)

    def split_detailed(self, other: 'Triangle', eps: float = EPSILON) -> SplitResult:
        """Subdivide this triangle along its intersection with ``other``."""
        self._require_geometry()
        other._require_geometry()
        side = self.get_classification(other.normal, other.w, eps)
        if side in (Classification.FRONT, Classification.BACK):
            return SplitResult([self.copy()], SplitPath.UNAFFECTED)

        if other.get_classification(self.normal, self.w, eps) is not Classification.SPANNING:
            return SplitResult([self.copy()], SplitPath.UNAFFECTED)

        overlap = self.get_intersection(other, eps)
        if not overlap.ok:
            return SplitResult([self.copy()], SplitPath.UNAFFECTED, intersection=overlap)
        result = self.split_with_coplanar_segment(overlap.segment, eps=eps)
        result.intersection = overlap
        return result

    def split(self, other: 'Triangle', eps: float = EPSILON) -> List['Triangle']:
        return self.split_detailed(other, eps).triangles

    # ------------------------------------------------------------------
    # coplanar pairs
    # ------------------------------------------------------------------
    def is_coplanar_with(self, other: 'Triangle', eps: float = EPSILON) -> bool:
        """Same supporting plane (either orientation) within ``eps``."""
        n0 = self.unit_normal()
        n1 = other.unit_normal()
        if n0 is None or n1 is None:
            return False
        if abs(float(np.dot(n0, n1))) < 1.0 - eps:
            return False
        return abs(distance_to_plane_signed(self.a, other.a, n1)) < eps

    def coplanar_triangles_overlap(self, other: 'Triangle', eps: float = EPSILON) -> bool:
        """True when two coplanar triangles share more than a point or an edge."""
        for v in other:
            if is_point_in_triangle(v, self.a, self.b, self.c, eps=-eps):
                return True
        for v in self:
            if is_point_in_triangle(v, other.a, other.b, other.c, eps=-eps):
                return True
        for edge in self.edges():
            if edge.trim_to_triangle(other.a, other.b, other.c, eps=-eps) and edge.length() > eps:
                return True
        return False

    def split_coplanar_detailed(self, other: 'Triangle', eps: float = EPSILON) -> SplitResult:
        """Cut this triangle along every edge of an overlapping coplanar triangle.

        ``split`` leaves coplanar pairs alone; this is the counterpart that
        imprints ``other``'s outline so both triangulations share the edges
        bounding their common region.
        """
        if not self.is_coplanar_with(other, eps) or not self.coplanar_triangles_overlap(other, eps):
            return SplitResult([self.copy()], SplitPath.UNAFFECTED)
        pieces = [self.copy()]
        retries = 0
        for edge in other.edges():
            next_pieces: List[Triangle] = []
            for piece in pieces:
                clipped = edge.copy()
                if clipped.trim_to_triangle(piece.a, piece.b, piece.c) and clipped.length() > eps:
                    result = piece.split_with_coplanar_segment(clipped, eps=eps)
                    retries += result.retries
                    next_pieces.extend(result.triangles)
                else:
                    next_pieces.append(piece)
            pieces = next_pieces
        path = SplitPath.SPLIT if len(pieces) > 1 else SplitPath.UNAFFECTED
        return SplitResult(pieces, path, retries)

    def split_coplanar(self, other: 'Triangle', eps: float = EPSILON) -> List['Triangle']:
        return self.split_coplanar_detailed(other, eps).triangles

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Triangle):
            return NotImplemented
        if self.classification is not other.classification:
            return False
        if not self.is_set or not other.is_set:
            return self.is_set == other.is_set
        return bool(all(np.array_equal(p, q) for p, q in zip(self, other))
                    and np.array_equal(self.normal, other.normal) and self.w == other.w)

    __hash__ = None

    def __repr__(self) -> str:
        if not self.is_set:
            return f"Triangle(<unset>, {self.classification.name})"
        return f"Triangle({self.a.tolist()}, {self.b.tolist()}, {self.c.tolist()}, {self.classification.name})"
