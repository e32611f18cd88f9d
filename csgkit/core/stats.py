"""Split statistics data structures and presentation utilities.

A :class:`SplitStats` is filled by the batch helpers in
:mod:`csgkit.core.operations` from the typed results the kernel returns,
so the rare fallback paths can be counted and asserted on in tests.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .triangle import IntersectionStatus, SplitPath, SplitResult


@dataclass
class SplitStats:
    attempts: int = 0
    split: int = 0
    unaffected: int = 0
    degenerate_intersections: int = 0
    no_overlap: int = 0
    reverse_fallback_used: int = 0
    unsplit_fallback_used: int = 0
    retries: int = 0
    triangles_out: int = 0

    def record(self, result: SplitResult) -> None:
        self.attempts += 1
        self.triangles_out += len(result.triangles)
        self.retries += result.retries
        if result.path is SplitPath.SPLIT:
            self.split += 1
        elif result.path is SplitPath.UNSPLIT_FALLBACK:
            self.unsplit_fallback_used += 1
        else:
            self.unaffected += 1
        inter = result.intersection
        if inter is None:
            return
        if inter.status is IntersectionStatus.DEGENERATE:
            self.degenerate_intersections += 1
        elif inter.status is IntersectionStatus.NO_OVERLAP:
            self.no_overlap += 1
        elif inter.status is IntersectionStatus.REVERSE_FALLBACK:
            self.reverse_fallback_used += 1

    def merge(self, other: 'SplitStats') -> None:
        for key, value in other.__dict__.items():
            setattr(self, key, getattr(self, key) + value)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attempts': self.attempts,
            'split': self.split,
            'unaffected': self.unaffected,
            'degenerate_intersections': self.degenerate_intersections,
            'no_overlap': self.no_overlap,
            'reverse_fallback_used': self.reverse_fallback_used,
            'unsplit_fallback_used': self.unsplit_fallback_used,
            'retries': self.retries,
            'triangles_out': self.triangles_out,
            'split_rate': (self.split / self.attempts) if self.attempts else 0.0,
            'fallback_rate': ((self.reverse_fallback_used + self.unsplit_fallback_used) / self.attempts)
                             if self.attempts else 0.0,
        }


def format_stats_table(stats_dict: Dict[str, Dict[str, Any]]) -> str:
    """Return a human readable multi-line table, one row per labelled stats dict."""
    if not stats_dict:
        return "<no stats>"
    header = ["label", "attempts", "split", "unaff", "degen", "noOvl", "revFb", "unsplitFb", "split%"]
    rows = []
    for label in sorted(stats_dict.keys()):
        s = stats_dict[label]
        rows.append([
            label, str(s['attempts']), str(s['split']), str(s['unaffected']),
            str(s['degenerate_intersections']), str(s['no_overlap']),
            str(s['reverse_fallback_used']), str(s['unsplit_fallback_used']),
            f"{s['split_rate'] * 100.0:6.2f}",
        ])
    col_w = [len(h) for h in header]
    for r in rows:
        for i, v in enumerate(r):
            col_w[i] = max(col_w[i], len(v))

    def fmt(r):
        return " ".join(r[i].rjust(col_w[i]) for i in range(len(r)))
    lines = [fmt(header), "-" * (sum(col_w) + len(col_w) - 1)] + [fmt(r) for r in rows]
    return "\n".join(lines)


__all__ = ["SplitStats", "format_stats_table"]
