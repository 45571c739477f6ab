"""Server card: header, player-count graph and stats row."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from PySide6 import QtCore, QtGui, QtWidgets

from config import GraphConfig
from core.samples import ServerSnapshot
from ui.graph_canvas import PlayerGraphCanvas
from ui.snackbar import Snackbar
from ui.themes import ThemeDefinition, resolve_theme

LOG = logging.getLogger(__name__)

IMAGE_SIZE = 50
COPY_SUCCESS_MESSAGE = "Copied to clipboard!"
COPY_FAILURE_MESSAGE = "Failed to copy to clipboard."


def copy_to_clipboard(text: str) -> bool:
    """Write ``text`` to the system clipboard and confirm it reads back."""
    if QtGui.QGuiApplication.instance() is None:
        return False
    clipboard = QtGui.QGuiApplication.clipboard()
    if clipboard is None:
        return False
    clipboard.setText(text)
    return clipboard.text() == text


def load_server_image(path: Path | None, size: int = IMAGE_SIZE) -> QtGui.QPixmap | None:
    if path is None:
        return None
    pixmap = QtGui.QPixmap(str(path))
    if pixmap.isNull():
        LOG.warning("Failed to load server image %s", path)
        return None
    return pixmap.scaled(
        size, size, QtCore.Qt.KeepAspectRatio, QtCore.Qt.SmoothTransformation
    )


class _StatBlock(QtWidgets.QFrame):
    def __init__(self, title: str, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self._title = QtWidgets.QLabel(title, self)
        self._title.setObjectName("statTitle")
        self._value = QtWidgets.QLabel("0", self)
        self._value.setObjectName("statValue")
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 12)
        layout.setSpacing(2)
        layout.addWidget(self._title)
        layout.addWidget(self._value)

    def set_value(self, value: int) -> None:
        self._value.setText(str(value))

    def value_text(self) -> str:
        return self._value.text()


class ServerCard(QtWidgets.QFrame):
    """One server's card. Hover and notification state stay on the instance."""

    addressCopied = QtCore.Signal(bool)

    def __init__(
        self,
        snapshot: ServerSnapshot | None = None,
        *,
        config: GraphConfig | None = None,
        theme: ThemeDefinition | None = None,
        clipboard_writer: Callable[[str], bool] | None = None,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("serverCard")
        self._config = config or GraphConfig()
        self._theme = theme or resolve_theme(self._config.theme)
        self._copy = clipboard_writer or copy_to_clipboard
        self._snapshot: ServerSnapshot | None = None

        header = QtWidgets.QFrame(self)
        header.setObjectName("cardHeader")
        self._image_label = QtWidgets.QLabel(header)
        self._image_label.setObjectName("serverImage")
        self._image_label.setFixedSize(IMAGE_SIZE, IMAGE_SIZE)
        self._name_label = QtWidgets.QLabel(header)
        self._name_label.setObjectName("serverName")
        self._address_label = QtWidgets.QLabel(header)
        self._address_label.setObjectName("serverAddress")
        self._address_label.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)

        self._copy_button = QtWidgets.QToolButton(header)
        self._copy_button.setObjectName("copyButton")
        self._copy_button.setText("Copy")
        self._copy_button.setToolTip("Copy address")
        self._copy_button.setCursor(QtCore.Qt.PointingHandCursor)
        self._copy_button.clicked.connect(self.copy_address)

        titles = QtWidgets.QVBoxLayout()
        titles.setContentsMargins(0, 0, 0, 0)
        titles.setSpacing(0)
        titles.addWidget(self._name_label)
        titles.addWidget(self._address_label)

        header_layout = QtWidgets.QHBoxLayout(header)
        header_layout.setContentsMargins(0, 0, 0, 12)
        header_layout.setSpacing(12)
        header_layout.addWidget(self._image_label)
        header_layout.addLayout(titles, 1)
        header_layout.addWidget(self._copy_button, 0, QtCore.Qt.AlignTop)

        self.canvas = PlayerGraphCanvas(
            theme=self._theme,
            metrics=self._config.tooltip_metrics(),
            timestamp_format=self._config.timestamp_format,
            show_peak_marker=self._config.show_peak_marker,
            parent=self,
        )

        stats = QtWidgets.QFrame(self)
        stats.setObjectName("statsRow")
        self._current_stat = _StatBlock("Current", stats)
        self._peak_stat = _StatBlock("24h Peak", stats)
        self._all_time_stat = _StatBlock("Highest Players", stats)
        stats_layout = QtWidgets.QHBoxLayout(stats)
        stats_layout.setContentsMargins(0, 8, 0, 0)
        stats_layout.setSpacing(12)
        for block in (self._current_stat, self._peak_stat, self._all_time_stat):
            stats_layout.addWidget(block, 1)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(8)
        layout.addWidget(header)
        layout.addWidget(self.canvas)
        layout.addWidget(stats)

        # overlays the card rather than taking a layout slot
        self.snackbar = Snackbar(duration_ms=self._config.notification_duration_ms, parent=self)

        self.set_theme(self._theme)
        if snapshot is not None:
            self.set_snapshot(snapshot)

    @property
    def snapshot(self) -> ServerSnapshot | None:
        return self._snapshot

    def stat_values(self) -> dict[str, str]:
        return {
            "Current": self._current_stat.value_text(),
            "24h Peak": self._peak_stat.value_text(),
            "Highest Players": self._all_time_stat.value_text(),
        }

    def set_snapshot(self, snapshot: ServerSnapshot) -> None:
        self._snapshot = snapshot
        self._name_label.setText(snapshot.name)
        self._address_label.setText(snapshot.address)
        self._copy_button.setEnabled(bool(snapshot.address))

        pixmap = load_server_image(snapshot.image)
        if pixmap is None:
            self._image_label.clear()
        else:
            self._image_label.setPixmap(pixmap)

        self._current_stat.set_value(snapshot.current_players)
        self._peak_stat.set_value(snapshot.peak_24h)
        self._all_time_stat.set_value(snapshot.all_time_peak)

        self.canvas.set_label(snapshot.name)
        self.canvas.set_series(snapshot.series)

    def set_theme(self, theme: ThemeDefinition) -> None:
        self._theme = theme
        self.setStyleSheet(theme.stylesheet)
        self.canvas.set_theme(theme)

    @QtCore.Slot()
    def copy_address(self) -> bool:
        address = self._snapshot.address if self._snapshot is not None else ""
        if not address:
            return False
        try:
            ok = bool(self._copy(address))
        except Exception as exc:  # clipboard backends are outside our control
            LOG.warning("Clipboard write failed: %s", exc)
            ok = False
        if ok:
            self.snackbar.show_message(COPY_SUCCESS_MESSAGE, "success")
        else:
            self.snackbar.show_message(COPY_FAILURE_MESSAGE, "error")
        self.addressCopied.emit(ok)
        return ok

    def resizeEvent(self, ev) -> None:  # type: ignore[override]
        super().resizeEvent(ev)
        snackbar = getattr(self, "snackbar", None)
        if snackbar is not None and snackbar.isVisible():
            snackbar.reposition()
