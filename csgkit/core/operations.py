"""Batch helpers built on the pairwise triangle primitive.

These apply :meth:`Triangle.split` and :meth:`Triangle.insert` over small
collections. They do not build a BSP tree or pair triangles spatially;
that belongs to the boolean driver calling them.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_CONFIG, KernelConfig
from .constants import EPSILON
from .geometry import as_point, is_point_in_triangle
from .logging_utils import configure_logging, get_logger
from .stats import SplitStats
from .triangle import Triangle

logger = get_logger('csgkit.operations')

__all__ = [
    'split_triangles',
    'split_pair',
    'insert_points',
    'total_area',
]


def _resolve(config: Optional[KernelConfig]) -> KernelConfig:
    cfg = DEFAULT_CONFIG if config is None else config
    if cfg.log_level is not None:
        configure_logging(cfg.log_level)
    return cfg


def split_triangles(triangles: Iterable[Triangle], cutter: Triangle,
                    config: Optional[KernelConfig] = None,
                    stats: Optional[SplitStats] = None) -> List[Triangle]:
    """Split every triangle against ``cutter`` and concatenate the pieces."""
    cfg = _resolve(config)
    out: List[Triangle] = []
    n_in = 0
    for tri in triangles:
        n_in += 1
        result = tri.split_detailed(cutter, eps=cfg.eps)
        if stats is not None:
            stats.record(result)
        out.extend(result.triangles)
    logger.debug('split_triangles: %d in -> %d out', n_in, len(out))
    return out


def split_pair(a: Triangle, b: Triangle, config: Optional[KernelConfig] = None,
               stats: Optional[SplitStats] = None) -> Tuple[List[Triangle], List[Triangle]]:
    """Subdivide two triangles against each other.

    Crossing pairs go through :meth:`Triangle.split` in both directions.
    Coplanar pairs, which ``split`` leaves untouched, are cut along each
    other's outline with :meth:`Triangle.split_coplanar`.
    """
    cfg = _resolve(config)
    if a.is_coplanar_with(b, cfg.eps):
        logger.debug('split_pair: coplanar pair, imprinting outlines')
        result_a = a.split_coplanar_detailed(b, cfg.eps)
        result_b = b.split_coplanar_detailed(a, cfg.eps)
    else:
        result_a = a.split_detailed(b, eps=cfg.eps)
        result_b = b.split_detailed(a, eps=cfg.eps)
    if stats is not None:
        stats.record(result_a)
        stats.record(result_b)
    return result_a.triangles, result_b.triangles


def insert_points(triangle: Triangle, points, eps: float = EPSILON) -> List[Triangle]:
    """Insert several points, each into every piece that currently contains it.

    A point on an edge shared by two pieces splits both, so no T-junction is
    left behind. Points off the plane or outside the footprint are skipped.
    """
    pieces = [triangle.copy()]
    for point in points:
        p = as_point(point)
        next_pieces: List[Triangle] = []
        inserted = False
        for piece in pieces:
            if is_point_in_triangle(p, piece.a, piece.b, piece.c, piece.normal, eps):
                sub = piece.insert(p, eps)
                inserted = inserted or len(sub) > 1
                next_pieces.extend(sub)
            else:
                next_pieces.append(piece)
        if not inserted:
            logger.debug('insert_points: point %s not inserted', p.tolist())
        pieces = next_pieces
    return pieces


def total_area(triangles: Iterable[Triangle]) -> float:
    return float(sum(t.area() for t in triangles))
