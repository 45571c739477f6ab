"""Headless smoke tests for the graph canvas and server card."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from pathlib import Path

import pytest

try:  # pragma: no cover - environment-dependent import guard
    from PySide6 import QtCore, QtGui, QtWidgets
except ImportError as exc:  # pragma: no cover - skip when Qt dependencies missing
    pytest.skip(f"PySide6 import failed: {exc}", allow_module_level=True)

from config import GraphConfig
from core.samples import Sample, SeriesInput, ServerSnapshot
from ui.graph_canvas import PlayerGraphCanvas
from ui.server_card import COPY_FAILURE_MESSAGE, COPY_SUCCESS_MESSAGE, ServerCard
from ui.themes import THEMES


# Ensure the tests run with Qt's offscreen platform.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qt_app():
    """Provide a global QApplication for headless UI tests."""

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    yield app


def _series(*counts, capacity=10, peak=0):
    samples = tuple(Sample(c, 1_700_000_000_000 + i * 300_000) for i, c in enumerate(counts))
    return SeriesInput(samples, capacity, peak)


def _snapshot(**overrides):
    data = dict(
        name="Lobby",
        address="lobby.example.net",
        current_players=3,
        capacity=10,
        peak_24h=10,
        all_time_peak=42,
        samples=_series(5, 10, 3).samples,
    )
    data.update(overrides)
    return ServerSnapshot(**data)


def _make_canvas(**kwargs) -> PlayerGraphCanvas:
    canvas = PlayerGraphCanvas(label="Lobby", **kwargs)
    canvas.resize(600, canvas.height())
    return canvas


def test_canvas_builds_outline(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(5, 10, 3))

    geometry = canvas.geometry_data
    assert geometry.width_units == 3.0
    assert geometry.point_count == 5
    assert canvas.height() == 96


def test_outline_rebuild_logs_svg_path(qt_app, caplog):
    canvas = _make_canvas()
    with caplog.at_level(logging.DEBUG, logger="ui.graph_canvas"):
        canvas.set_series(_series(5, 10, 3))
    assert "M0,95 0,47.5 1.5,0 3,66.5 3,95 Z" in caplog.text


def test_canvas_hover_and_leave(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(5, 10, 3))
    seen = []
    canvas.hoverChanged.connect(seen.append)

    canvas.handle_pointer_move(QtCore.QPointF(1.6, 40.0))
    result = canvas.hover_result
    assert result is not None
    assert result.index == 1
    assert canvas.guide_visible()
    assert canvas.tooltip_visible()
    title, value = canvas.tooltip_text()
    assert value == "◆ Lobby: 10"
    assert canvas.tooltip_box.box_x == pytest.approx(11.6)

    canvas.leaveEvent(QtCore.QEvent(QtCore.QEvent.Type.Leave))
    assert canvas.hover_result is None
    assert not canvas.guide_visible()
    assert not canvas.tooltip_visible()
    assert seen[0] is result
    assert seen[-1] is None


def test_canvas_pointer_past_drawn_width_clamps(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(5, 10, 3))

    canvas.handle_pointer_move(QtCore.QPointF(300.0, 10.0))
    assert canvas.hover_result.index == 2
    assert canvas.tooltip_box.flipped


def test_canvas_empty_series_never_hovers(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(capacity=0))

    canvas.handle_pointer_move(QtCore.QPointF(120.0, 10.0))
    assert canvas.hover_result is None
    assert not canvas.tooltip_visible()


def test_pointer_outside_widget_clears_hover(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(5, 10, 3))

    for outside in (QtCore.QPointF(700.0, 10.0), QtCore.QPointF(1.0, 200.0)):
        canvas.handle_pointer_move(QtCore.QPointF(1.6, 40.0))
        assert canvas.hover_result is not None
        canvas.handle_pointer_move(outside)
        assert canvas.hover_result is None
        assert not canvas.guide_visible()
        assert not canvas.tooltip_visible()


def test_resize_relayouts_visible_tooltip(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(5, 10, 3, capacity=0))
    canvas.handle_pointer_move(QtCore.QPointF(100.0, 10.0))
    assert canvas.tooltip_box.box_x == pytest.approx(110.0)

    old_size = canvas.size()
    canvas.resize(200, canvas.height())
    canvas.resizeEvent(QtGui.QResizeEvent(canvas.size(), old_size))
    box = canvas.tooltip_box
    assert box.box_x + box.box_width == pytest.approx(200.0)
    assert canvas.hover_result is not None


def test_tooltip_title_follows_default_locale(qt_app):
    previous = QtCore.QLocale()
    QtCore.QLocale.setDefault(QtCore.QLocale("de_DE"))
    try:
        canvas = _make_canvas()
    finally:
        QtCore.QLocale.setDefault(previous)

    stamp = datetime(2024, 3, 7, 21, 5)
    canvas.set_series(SeriesInput((Sample(4, int(stamp.timestamp() * 1000)),), 10, 4))
    canvas.handle_pointer_move(QtCore.QPointF(0.0, 10.0))
    title, _ = canvas.tooltip_text()
    assert title == "07.03.24, 21:05"


def test_explicit_timestamp_format_overrides_locale(qt_app):
    canvas = _make_canvas(timestamp_format="%Y-%m-%d %H:%M")
    stamp = datetime(2024, 3, 7, 21, 5)
    canvas.set_series(SeriesInput((Sample(4, int(stamp.timestamp() * 1000)),), 10, 4))
    canvas.handle_pointer_move(QtCore.QPointF(0.0, 10.0))
    assert canvas.tooltip_text()[0] == "2024-03-07 21:05"


def test_new_series_clears_hover(qt_app):
    canvas = _make_canvas()
    canvas.set_series(_series(1, 2, 3, 4))
    canvas.handle_pointer_move(QtCore.QPointF(2.0, 10.0))
    assert canvas.hover_result is not None

    canvas.set_series(_series(4, 3))
    assert canvas.hover_result is None


def test_peak_marker_toggle(qt_app):
    canvas = _make_canvas(show_peak_marker=True)
    canvas.set_series(_series(1, 7, 3, peak=7))
    assert canvas.peak_marker_visible()

    canvas.set_series(_series(1, 2, 3, peak=7))
    assert not canvas.peak_marker_visible()

    canvas.set_series(_series(1, 7, 3, peak=7))
    canvas.set_show_peak_marker(False)
    assert not canvas.peak_marker_visible()


def test_server_card_populates_stats(qt_app):
    card = ServerCard(_snapshot(), clipboard_writer=lambda text: True)
    assert card.stat_values() == {"Current": "3", "24h Peak": "10", "Highest Players": "42"}
    assert card.canvas.series.capacity_hint == 10
    assert card.snackbar.isHidden()


def test_server_card_copy_success(qt_app):
    copied = []

    def writer(text):
        copied.append(text)
        return True

    card = ServerCard(_snapshot(), clipboard_writer=writer)
    assert card.copy_address() is True
    assert copied == ["lobby.example.net"]
    assert not card.snackbar.isHidden()
    assert card.snackbar.kind == "success"
    assert card.snackbar.message() == COPY_SUCCESS_MESSAGE

    card.snackbar.dismiss()
    assert card.snackbar.isHidden()


@pytest.mark.parametrize("writer", [lambda text: False, lambda text: 1 / 0])
def test_server_card_copy_failure_shows_error(qt_app, writer):
    card = ServerCard(_snapshot(), clipboard_writer=writer)
    assert card.copy_address() is False
    assert card.snackbar.kind == "error"
    assert card.snackbar.message() == COPY_FAILURE_MESSAGE


def test_cards_keep_independent_state(qt_app):
    first = ServerCard(_snapshot(), clipboard_writer=lambda text: True)
    second = ServerCard(_snapshot(name="Arena"), clipboard_writer=lambda text: True)

    first.copy_address()
    first.canvas.handle_pointer_move(QtCore.QPointF(1.0, 10.0))
    assert second.snackbar.isHidden()
    assert second.canvas.hover_result is None


def test_server_card_missing_image_is_not_fatal(qt_app, tmp_path: Path):
    card = ServerCard(
        _snapshot(image=tmp_path / "missing.png", address=""),
        config=GraphConfig(theme="Daylight"),
    )
    assert card._image_label.pixmap() is None or card._image_label.pixmap().isNull()
    assert card.copy_address() is False


def test_theme_switch(qt_app):
    card = ServerCard(_snapshot(), theme=THEMES["Daylight"], clipboard_writer=lambda text: True)
    card.set_theme(THEMES["Midnight"])
    assert "#0f0f10" in card.styleSheet()
