"""Configuration object for batch use of the CSG kernel."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from .constants import EPSILON


@dataclass(frozen=True)
class KernelConfig:
    """Settings shared by every pairwise operation of one boolean run.

    Attributes
    ----------
    eps : float
        Point/plane tolerance handed to classification, intersection and
        subdivision. Must stay constant for the whole run.
    log_level : str or int or None
        When set, the batch helpers call ``configure_logging`` with it.
    """
    eps: float = EPSILON
    log_level: Optional[Union[str, int]] = None

    def __post_init__(self):
        if not self.eps > 0.0:
            raise ValueError(f"eps must be positive, got {self.eps!r}")

    def with_overrides(self, **overrides: Any) -> 'KernelConfig':
        return replace(self, **overrides)


DEFAULT_CONFIG = KernelConfig()

__all__ = ['KernelConfig', 'DEFAULT_CONFIG']
