"""Public package API for csgkit, the triangle/plane kernel behind BSP-style CSG.

This facade provides a stable, flatter import surface on top of the
internal implementation package ``csgkit.core``.

Example
-------
    from csgkit import Triangle

    a = Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
    b = Triangle((0.5, -1, -1), (0.5, -1, 1), (0.5, 1, 0))
    pieces = a.split(b)

The deeper modules (``csgkit.core.*``) are considered internal and may
change; rely on this layer for public symbols.
"""
import logging as _logging

from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound

try:
    __version__ = _pkg_version("csgkit")  # populated when installed
except _NotFound:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

from .core import constants, geometry, operations, stats  # noqa: E402
from .core.config import DEFAULT_CONFIG, KernelConfig  # noqa: E402
from .core.constants import EPSILON, EPS_PARALLEL  # noqa: E402
from .core.geometry import (  # noqa: E402
    Classification, classify_point_with_plane, is_point_in_triangle, plane_from_points,
)
from .core.logging_utils import configure_logging, get_logger  # noqa: E402
from .core.operations import insert_points, split_pair, split_triangles, total_area  # noqa: E402
from .core.segment import LineSegment  # noqa: E402
from .core.stats import SplitStats, format_stats_table  # noqa: E402
from .core.triangle import (  # noqa: E402
    IntersectionResult, IntersectionStatus, SplitPath, SplitResult, Triangle,
)

__all__ = [
    '__version__',
    # kernel types
    'Triangle', 'LineSegment', 'Classification',
    'IntersectionResult', 'IntersectionStatus', 'SplitPath', 'SplitResult',
    # free functions
    'classify_point_with_plane', 'is_point_in_triangle', 'plane_from_points',
    'split_triangles', 'split_pair', 'insert_points', 'total_area',
    # tolerances / config
    'EPSILON', 'EPS_PARALLEL', 'KernelConfig', 'DEFAULT_CONFIG',
    # logging / stats
    'configure_logging', 'get_logger', 'SplitStats', 'format_stats_table',
    # submodules
    'constants', 'geometry', 'operations', 'stats',
]
