from datetime import datetime

import pytest

from core.samples import Sample
from core.tooltip import (
    DEFAULT_TIMESTAMP_FORMAT,
    INVALID_TIMESTAMP_TEXT,
    TooltipMetrics,
    format_timestamp,
    layout_tooltip,
    locale_timestamp_format,
    tooltip_lines,
)


def test_box_opens_right_of_pointer_near_left_edge():
    box = layout_tooltip(50.0, "Lobby")
    assert not box.flipped
    assert box.box_x == pytest.approx(60.0)
    assert box.text_x == pytest.approx(70.0)


def test_box_flips_left_past_threshold():
    box = layout_tooltip(200.0, "Lobby")
    assert box.flipped
    assert box.box_x == pytest.approx(200.0 - 190.0 + 10.0)
    assert box.text_x == pytest.approx(30.0)

    box = layout_tooltip(199.9, "Lobby")
    assert not box.flipped


def test_box_width_grows_with_label():
    assert layout_tooltip(0.0, "").box_width == pytest.approx(150.0)
    assert layout_tooltip(0.0, "abcd").box_width == pytest.approx(150.0 + 4 * 8 / 2)


def test_fixed_vertical_placement():
    box = layout_tooltip(10.0, "x")
    assert (box.box_y, box.box_height) == (5.0, 55.0)
    assert (box.title_y, box.value_y) == (25.0, 45.0)


def test_viewport_shift_only_when_overflowing():
    wide = layout_tooltip(100.0, "Lobby", viewport_width=1000.0)
    assert wide.box_x == pytest.approx(110.0)

    narrow = layout_tooltip(100.0, "Lobby", viewport_width=200.0)
    assert narrow.box_x + narrow.box_width == pytest.approx(200.0)
    assert narrow.text_x - narrow.box_x == pytest.approx(10.0)


def test_viewport_shift_never_goes_negative():
    box = layout_tooltip(20.0, "A very long server name", viewport_width=100.0)
    assert box.box_x == pytest.approx(0.0)


def test_custom_metrics():
    metrics = TooltipMetrics(offset=4.0, flip_distance=100.0, flip_threshold=50.0)
    box = layout_tooltip(60.0, "", metrics=metrics)
    assert box.flipped
    assert box.box_x == pytest.approx(60.0 - 100.0 + 4.0)


def test_format_timestamp_is_local_24_hour():
    stamp = datetime(2024, 3, 7, 21, 5)
    millis = int(stamp.timestamp() * 1000)
    assert format_timestamp(millis) == "03/07/24, 21:05"
    assert format_timestamp(millis, "%d.%m.%y %H:%M") == "07.03.24 21:05"


def test_tooltip_lines_segments():
    stamp = datetime(2023, 12, 31, 0, 9)
    sample = Sample(17, int(stamp.timestamp() * 1000))
    title, segments = tooltip_lines(sample, "Survival")
    assert title == format_timestamp(sample.timestamp_ms, DEFAULT_TIMESTAMP_FORMAT)
    assert segments == ("◆ ", "Survival: ", "17")


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("M/d/yy", "%m/%d/%y, %H:%M"),
        ("dd.MM.yy", "%d.%m.%y, %H:%M"),
        ("dd/MM/yyyy", "%d/%m/%y, %H:%M"),
        ("yyyy-MM-dd", "%y-%m-%d, %H:%M"),
        ("yy. M. d.", "%y. %m. %d, %H:%M"),
    ],
)
def test_locale_pattern_keeps_field_order(pattern, expected):
    assert locale_timestamp_format(pattern) == expected


def test_locale_pattern_without_all_fields_uses_default():
    assert locale_timestamp_format("") == DEFAULT_TIMESTAMP_FORMAT
    assert locale_timestamp_format("MMMM yyyy") == DEFAULT_TIMESTAMP_FORMAT


def test_day_first_locale_formats_day_first():
    stamp = datetime(2024, 3, 7, 21, 5)
    millis = int(stamp.timestamp() * 1000)
    assert format_timestamp(millis, locale_timestamp_format("dd.MM.yy")) == "07.03.24, 21:05"


@pytest.mark.parametrize("millis", [10**18, -(10**18)])
def test_unrepresentable_timestamp_uses_placeholder(millis):
    assert format_timestamp(millis) == INVALID_TIMESTAMP_TEXT
    title, segments = tooltip_lines(Sample(1, millis), "Lobby")
    assert title == INVALID_TIMESTAMP_TEXT
    assert segments[2] == "1"
