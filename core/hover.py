"""Map a pointer position on the chart back to the nearest sample."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from core.geometry import chart_width
from core.samples import Sample

__all__ = ["HoverResult", "nearest_index", "query_nearest"]


@dataclass(frozen=True, slots=True)
class HoverResult:
    pointer_x: float
    sample: Sample
    index: int


def nearest_index(pointer_x: float, sample_count: int, width: float) -> int | None:
    """Return the clamped sample index under ``pointer_x``.

    Halves round up, so a pointer exactly between two samples picks the
    later one.
    """
    if sample_count <= 0 or not math.isfinite(pointer_x):
        return None
    if sample_count == 1 or width <= 0:
        return 0
    raw = (pointer_x / width) * (sample_count - 1)
    idx = math.floor(raw + 0.5)
    if idx <= 0:
        return 0
    if idx >= sample_count:
        return sample_count - 1
    return int(idx)


def query_nearest(pointer_x: float, samples: Sequence[Sample], capacity_hint: int) -> HoverResult | None:
    n = len(samples)
    if n == 0 or not math.isfinite(pointer_x):
        return None
    idx = nearest_index(pointer_x, n, chart_width(n, capacity_hint))
    if idx is None:
        return None
    return HoverResult(float(pointer_x), samples[idx], idx)
