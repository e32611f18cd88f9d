"""Central numerical tolerances for the CSG kernel.

Every classification, intersection and subdivision routine defaults to
``EPSILON``. Mixing tolerances inside one boolean run produces inconsistent
triangulations, so tune it here (or thread a single value through a
:class:`csgkit.core.config.KernelConfig`) rather than at call sites.
"""
from __future__ import annotations

# Point/plane distance below which a point counts as lying on the plane.
# Also the squared-area floor for subdivision children.
EPSILON: float = 1e-5

# Ray/plane parallel guard, relative to the normal's length.
EPS_PARALLEL: float = 1e-12

# Outward slack when clipping a cut segment to a sub-triangle, and the
# relative threshold below which a segment counts as parallel to an edge.
EPS_TRIM: float = 1e-9

__all__ = [
    'EPSILON',
    'EPS_PARALLEL',
    'EPS_TRIM',
]
