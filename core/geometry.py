"""Outline geometry for the player-count area chart.

Coordinates follow the drawing surface: x grows to the right, y grows
downward, and the baseline sits at ``y == HEIGHT_UNITS``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from core.samples import Sample

__all__ = [
    "HEIGHT_UNITS",
    "FALLBACK_WIDTH",
    "ChartGeometry",
    "chart_width",
    "scale_max",
    "sample_x",
    "generate_path",
    "chart_geometry",
    "locate_peak",
    "outline_to_svg_path",
]

HEIGHT_UNITS = 95.0
FALLBACK_WIDTH = 500.0  # used when no capacity is known


@dataclass(frozen=True)
class ChartGeometry:
    outline: np.ndarray
    width_units: float
    height_units: float = HEIGHT_UNITS

    @property
    def point_count(self) -> int:
        return int(self.outline.shape[0])


def chart_width(sample_count: int, capacity_hint: int) -> float:
    """Canonical chart width shared by the outline, hover and peak marker."""
    if capacity_hint == 0:
        return FALLBACK_WIDTH
    return float(sample_count)


def scale_max(samples: Sequence[Sample], capacity_hint: int) -> int:
    if not samples:
        return int(capacity_hint)
    return max(int(capacity_hint), max(s.count for s in samples))


def sample_x(index: int, sample_count: int, width: float) -> float:
    """Map a sample index to its x position; a lone sample sits at the right edge."""
    if sample_count <= 1:
        return float(width)
    return (index / (sample_count - 1)) * width


def _baseline(width: float) -> np.ndarray:
    return np.array([[0.0, HEIGHT_UNITS], [width, HEIGHT_UNITS]], dtype=np.float64)


def generate_path(samples: Sequence[Sample], capacity_hint: int) -> np.ndarray:
    """Build the closed outline for ``samples``.

    Parameters
    ----------
    samples : sequence of Sample
        Observations ordered oldest to newest.
    capacity_hint : int
        Known slot ceiling; 0 when unknown.

    Returns
    -------
    np.ndarray
        ``(k, 2)`` float64 array of ``(x, y)`` points. The first and last
        points are baseline corners and the region closes between them. For
        two or more samples ``k == n + 2``; a single sample is drawn as a flat
        line across the full width; no samples or a zero scale yield the
        two-point baseline.
    """
    n = len(samples)
    width = chart_width(n, capacity_hint)
    peak = scale_max(samples, capacity_hint)
    if n == 0 or peak == 0:
        return _baseline(width)

    counts = np.fromiter((s.count for s in samples), dtype=np.float64, count=n)
    ys = HEIGHT_UNITS - (counts / float(peak)) * HEIGHT_UNITS

    if n == 1:
        y = float(ys[0])
        return np.array(
            [[0.0, HEIGHT_UNITS], [0.0, y], [width, y], [width, HEIGHT_UNITS]],
            dtype=np.float64,
        )

    xs = (np.arange(n, dtype=np.float64) / (n - 1)) * width
    out = np.empty((n + 2, 2), dtype=np.float64)
    out[0] = (0.0, HEIGHT_UNITS)
    out[1:-1, 0] = xs
    out[1:-1, 1] = ys
    out[-1] = (width, HEIGHT_UNITS)
    return out


def chart_geometry(samples: Sequence[Sample], capacity_hint: int) -> ChartGeometry:
    return ChartGeometry(
        outline=generate_path(samples, capacity_hint),
        width_units=chart_width(len(samples), capacity_hint),
    )


def locate_peak(samples: Sequence[Sample], observed_peak: int, capacity_hint: int) -> float | None:
    """Return the x position of the first sample that reached ``observed_peak``."""
    for idx, sample in enumerate(samples):
        if sample.count == observed_peak:
            n = len(samples)
            return sample_x(idx, n, chart_width(n, capacity_hint))
    return None


def outline_to_svg_path(outline: np.ndarray) -> str:
    """Serialize an outline as ``M x,y x,y ... Z``."""
    points = np.asarray(outline, dtype=np.float64)
    if points.size == 0:
        return ""
    coords = " ".join(f"{x:g},{y:g}" for x, y in points)
    return f"M{coords} Z"
