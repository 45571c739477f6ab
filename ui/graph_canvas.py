"""Player-count area chart drawn on a pixel-aligned pyqtgraph view."""

from __future__ import annotations

import html
import logging
import math

import numpy as np
import pyqtgraph as pg
from PySide6 import QtCore, QtGui, QtWidgets

from core.geometry import (
    HEIGHT_UNITS,
    ChartGeometry,
    chart_geometry,
    locate_peak,
    outline_to_svg_path,
)
from core.hover import HoverResult, query_nearest
from core.samples import SeriesInput
from core.tooltip import (
    TooltipBox,
    TooltipMetrics,
    layout_tooltip,
    locale_timestamp_format,
    tooltip_lines,
)
from ui.themes import DEFAULT_THEME, THEMES, ThemeDefinition

LOG = logging.getLogger(__name__)

FILL_TOP_ALPHA = 0.25
TOOLTIP_OPACITY = 0.9


def system_timestamp_format() -> str:
    """strftime format following the default QLocale's short date order."""
    locale = QtCore.QLocale()
    return locale_timestamp_format(locale.dateFormat(QtCore.QLocale.FormatType.ShortFormat))


def outline_to_painter_path(outline: np.ndarray) -> QtGui.QPainterPath:
    path = QtGui.QPainterPath()
    if outline.shape[0] == 0:
        return path
    path.moveTo(float(outline[0, 0]), float(outline[0, 1]))
    for x, y in outline[1:]:
        path.lineTo(float(x), float(y))
    path.closeSubpath()
    return path


class PlayerGraphCanvas(pg.GraphicsView):
    """Area chart with a hover guide line and tooltip.

    Scene coordinates equal widget pixels (pyqtgraph's auto pixel range), with
    y growing downward, so outline points are drawn exactly as generated.
    Hover state belongs to this instance and is rebuilt from scratch on every
    pointer move.
    """

    hoverChanged = QtCore.Signal(object)

    def __init__(
        self,
        *,
        label: str = "",
        theme: ThemeDefinition | None = None,
        metrics: TooltipMetrics | None = None,
        timestamp_format: str | None = None,
        show_peak_marker: bool = False,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent, background=None)
        self._theme = theme or THEMES[DEFAULT_THEME]
        self._metrics = metrics or TooltipMetrics()
        # empty means follow the locale
        self._timestamp_format = timestamp_format or system_timestamp_format()
        self._show_peak_marker = show_peak_marker
        self._label = label
        self._series = SeriesInput()
        self._geometry: ChartGeometry = chart_geometry((), 0)
        self._hover: HoverResult | None = None
        self._tooltip_box: TooltipBox | None = None

        self.setMouseTracking(True)
        self.setAntialiasing(True)
        self.setFixedHeight(int(HEIGHT_UNITS) + 1)
        self.setSizePolicy(QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Fixed)

        scene = self.scene()
        self._area_item = QtWidgets.QGraphicsPathItem()
        self._area_item.setZValue(0)
        scene.addItem(self._area_item)

        self._peak_item = QtWidgets.QGraphicsLineItem()
        self._peak_item.setZValue(5)
        self._peak_item.setVisible(False)
        scene.addItem(self._peak_item)

        self._guide_item = QtWidgets.QGraphicsLineItem()
        self._guide_item.setZValue(10)
        self._guide_item.setVisible(False)
        scene.addItem(self._guide_item)

        self._tooltip_item = QtWidgets.QGraphicsPathItem()
        self._tooltip_item.setZValue(20)
        self._tooltip_item.setOpacity(TOOLTIP_OPACITY)
        self._tooltip_item.setVisible(False)
        scene.addItem(self._tooltip_item)

        self._title_font = QtGui.QFont("monospace")
        self._title_font.setStyleHint(QtGui.QFont.Monospace)
        self._title_font.setPixelSize(16)
        self._value_font = QtGui.QFont(self._title_font)
        self._value_font.setPixelSize(14)

        self._title_item = QtWidgets.QGraphicsSimpleTextItem()
        self._title_item.setFont(self._title_font)
        self._title_item.setZValue(21)
        self._title_item.setVisible(False)
        scene.addItem(self._title_item)

        self._value_item = QtWidgets.QGraphicsTextItem()
        self._value_item.setFont(self._value_font)
        self._value_item.document().setDocumentMargin(0)
        self._value_item.setZValue(21)
        self._value_item.setVisible(False)
        scene.addItem(self._value_item)

        self._apply_theme()
        scene.sigMouseMoved.connect(self.handle_pointer_move)

    # ----- public API -----

    @property
    def geometry_data(self) -> ChartGeometry:
        return self._geometry

    @property
    def hover_result(self) -> HoverResult | None:
        return self._hover

    @property
    def tooltip_box(self) -> TooltipBox | None:
        return self._tooltip_box

    @property
    def series(self) -> SeriesInput:
        return self._series

    def tooltip_text(self) -> tuple[str, str] | None:
        if self._hover is None:
            return None
        title, segments = tooltip_lines(self._hover.sample, self._label, self._timestamp_format)
        return title, "".join(segments)

    def guide_visible(self) -> bool:
        return self._guide_item.isVisible()

    def tooltip_visible(self) -> bool:
        return self._tooltip_item.isVisible()

    def peak_marker_visible(self) -> bool:
        return self._peak_item.isVisible()

    def set_label(self, label: str) -> None:
        self._label = label
        if self._hover is not None:
            self._show_tooltip(self._hover)

    def set_series(self, series: SeriesInput) -> None:
        self._series = series
        self._geometry = chart_geometry(series.samples, series.capacity_hint)
        self._area_item.setPath(outline_to_painter_path(self._geometry.outline))
        if LOG.isEnabledFor(logging.DEBUG):
            LOG.debug(
                "Outline rebuilt: %d points, width %.1f: %s",
                self._geometry.point_count,
                self._geometry.width_units,
                outline_to_svg_path(self._geometry.outline),
            )
        self._update_peak_marker()
        self.clear_hover()

    def set_theme(self, theme: ThemeDefinition) -> None:
        self._theme = theme
        self._apply_theme()
        if self._hover is not None:
            self._show_tooltip(self._hover)

    def set_show_peak_marker(self, enabled: bool) -> None:
        self._show_peak_marker = bool(enabled)
        self._update_peak_marker()

    @QtCore.Slot(object)
    def handle_pointer_move(self, scene_pos) -> None:
        x = float(scene_pos.x())
        y = float(scene_pos.y())
        if not (math.isfinite(x) and math.isfinite(y)):
            self.clear_hover()
            return
        if x < 0 or y < 0 or x > self.width() or y > self.height():
            self.clear_hover()
            return
        result = query_nearest(x, self._series.samples, self._series.capacity_hint)
        if result is None:
            self.clear_hover()
            return
        self._hover = result
        self._show_tooltip(result)
        self.hoverChanged.emit(result)

    def clear_hover(self) -> None:
        had_hover = self._hover is not None
        self._hover = None
        self._tooltip_box = None
        for item in (self._guide_item, self._tooltip_item, self._title_item, self._value_item):
            item.setVisible(False)
        if had_hover:
            self.hoverChanged.emit(None)

    # ----- Qt overrides -----

    def leaveEvent(self, ev) -> None:  # type: ignore[override]
        self.clear_hover()
        super().leaveEvent(ev)

    def resizeEvent(self, ev) -> None:  # type: ignore[override]
        super().resizeEvent(ev)
        if not hasattr(self, "_value_item"):
            return  # resize during base-class construction
        if self._hover is not None:
            # the viewport shift depends on the current width
            self._show_tooltip(self._hover)
        self._update_peak_marker()

    # ----- internals -----

    def _apply_theme(self) -> None:
        theme = self._theme
        color = pg.mkColor(theme.series_color)
        gradient = QtGui.QLinearGradient(0.0, 0.0, 0.0, HEIGHT_UNITS)
        top = QtGui.QColor(color)
        top.setAlphaF(FILL_TOP_ALPHA)
        bottom = QtGui.QColor(color)
        bottom.setAlphaF(0.0)
        gradient.setColorAt(0.0, top)
        gradient.setColorAt(1.0, bottom)
        self._area_item.setBrush(QtGui.QBrush(gradient))
        self._area_item.setPen(pg.mkPen(color, width=1))

        guide_pen = pg.mkPen(theme.guide_color, width=1, style=QtCore.Qt.DashLine)
        self._guide_item.setPen(guide_pen)
        self._peak_item.setPen(guide_pen)

        self._tooltip_item.setBrush(pg.mkBrush(theme.tooltip_background))
        self._tooltip_item.setPen(pg.mkPen(theme.card_border, width=0.5))
        self._title_item.setBrush(pg.mkBrush(theme.tooltip_title))

    def _update_peak_marker(self) -> None:
        if not self._show_peak_marker:
            self._peak_item.setVisible(False)
            return
        x = locate_peak(
            self._series.samples, self._series.observed_peak, self._series.capacity_hint
        )
        if x is None:
            self._peak_item.setVisible(False)
            return
        self._peak_item.setLine(x, 0.0, x, HEIGHT_UNITS)
        self._peak_item.setVisible(True)

    def _baseline_offset(self, font: QtGui.QFont) -> float:
        return QtGui.QFontMetricsF(font).ascent()

    def _show_tooltip(self, result: HoverResult) -> None:
        x = result.pointer_x
        self._guide_item.setLine(x, 0.0, x, float(self.height()))
        self._guide_item.setVisible(True)

        box = layout_tooltip(x, self._label, float(self.width()), metrics=self._metrics)
        self._tooltip_box = box
        outline = QtGui.QPainterPath()
        outline.addRoundedRect(
            QtCore.QRectF(box.box_x, box.box_y, box.box_width, box.box_height),
            self._metrics.corner_radius,
            self._metrics.corner_radius,
        )
        self._tooltip_item.setPath(outline)
        self._tooltip_item.setVisible(True)

        title, (marker, label, value) = tooltip_lines(
            result.sample, self._label, self._timestamp_format
        )
        self._title_item.setText(title)
        self._title_item.setPos(box.text_x, box.title_y - self._baseline_offset(self._title_font))
        self._title_item.setVisible(True)

        theme = self._theme
        self._value_item.setHtml(
            f'<span style="color:{theme.series_color}">{html.escape(marker)}</span>'
            f'<span style="color:{theme.tooltip_label}">{html.escape(label)}</span>'
            f'<span style="color:{theme.tooltip_value}">{html.escape(value)}</span>'
        )
        self._value_item.setPos(box.text_x, box.value_y - self._baseline_offset(self._value_font))
        self._value_item.setVisible(True)
