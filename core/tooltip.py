"""Tooltip placement and text for the hovered sample."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from core.samples import Sample

__all__ = [
    "DEFAULT_TIMESTAMP_FORMAT",
    "INVALID_TIMESTAMP_TEXT",
    "TooltipMetrics",
    "TooltipBox",
    "layout_tooltip",
    "locale_timestamp_format",
    "format_timestamp",
    "tooltip_lines",
]

# 24-hour clock, two-digit day/month/year/hour/minute; used when no locale
# date pattern is available
DEFAULT_TIMESTAMP_FORMAT = "%m/%d/%y, %H:%M"
INVALID_TIMESTAMP_TEXT = "--/--/--, --:--"

SERIES_MARKER = "◆ "

_DATE_FIELD_RE = re.compile(r"d+|M+|y+")
_STRFTIME_FIELDS = {"d": "%d", "M": "%m", "y": "%y"}


@dataclass(frozen=True)
class TooltipMetrics:
    offset: float = 10.0
    flip_distance: float = 190.0
    flip_threshold: float = 200.0
    base_width: float = 150.0
    char_width_factor: float = 8.0
    text_offset: float = 20.0
    box_y: float = 5.0
    box_height: float = 55.0
    corner_radius: float = 5.0
    title_y: float = 25.0
    value_y: float = 45.0


@dataclass(frozen=True, slots=True)
class TooltipBox:
    box_x: float
    box_y: float
    box_width: float
    box_height: float
    text_x: float
    title_y: float
    value_y: float
    flipped: bool


def layout_tooltip(
    pointer_x: float,
    label_text: str,
    viewport_width: float | None = None,
    *,
    metrics: TooltipMetrics = TooltipMetrics(),
) -> TooltipBox:
    """Place the tooltip box beside the pointer.

    Near the left edge the box opens to the right of the pointer; past
    ``flip_threshold`` it opens to the left. With ``viewport_width`` the box
    is additionally shifted left (never past 0) if it would still overflow.
    """
    flipped = pointer_x >= metrics.flip_threshold
    anchor = pointer_x - metrics.flip_distance if flipped else pointer_x
    box_width = metrics.base_width + (len(label_text) * metrics.char_width_factor) / 2.0
    box_x = anchor + metrics.offset
    text_x = anchor + metrics.text_offset

    if viewport_width is not None:
        overflow = box_x + box_width - viewport_width
        if overflow > 0:
            shift = min(overflow, max(0.0, box_x))
            box_x -= shift
            text_x -= shift

    return TooltipBox(
        box_x=box_x,
        box_y=metrics.box_y,
        box_width=box_width,
        box_height=metrics.box_height,
        text_x=text_x,
        title_y=metrics.title_y,
        value_y=metrics.value_y,
        flipped=flipped,
    )


def locale_timestamp_format(date_pattern: str) -> str:
    """Build a strftime format from a locale's short date pattern.

    ``date_pattern`` uses Qt/CLDR field letters (``"M/d/yy"``,
    ``"dd.MM.yy"``, ``"yyyy-MM-dd"``). The locale's field order and
    separator are kept; every field becomes two digits and the time is
    appended on a 24-hour clock. Patterns without a day, month and year
    fall back to :data:`DEFAULT_TIMESTAMP_FORMAT`.
    """
    order: list[str] = []
    for run in _DATE_FIELD_RE.findall(date_pattern):
        if run[0] not in order:
            order.append(run[0])
    if sorted(order) != ["M", "d", "y"]:
        return DEFAULT_TIMESTAMP_FORMAT

    pieces = _DATE_FIELD_RE.split(date_pattern)
    separator = pieces[1] if len(pieces) > 1 else ""
    if not separator or "'" in separator:
        separator = "/"
    date_part = separator.join(_STRFTIME_FIELDS[field] for field in order)
    return f"{date_part}, %H:%M"


def format_timestamp(timestamp_ms: int, fmt: str = DEFAULT_TIMESTAMP_FORMAT) -> str:
    """Format epoch milliseconds in local time.

    Timestamps the platform cannot represent render as
    :data:`INVALID_TIMESTAMP_TEXT`.
    """
    try:
        stamp = datetime.fromtimestamp(timestamp_ms / 1000.0)
    except (ValueError, OverflowError, OSError):
        return INVALID_TIMESTAMP_TEXT
    return stamp.strftime(fmt)


def tooltip_lines(
    sample: Sample, label: str, fmt: str = DEFAULT_TIMESTAMP_FORMAT
) -> tuple[str, tuple[str, str, str]]:
    """Return the timestamp line and the (marker, label, value) segments."""
    return format_timestamp(sample.timestamp_ms, fmt), (
        SERIES_MARKER,
        f"{label}: ",
        str(sample.count),
    )
