"""In-card success/error notification that hides itself after a delay."""

from __future__ import annotations

import logging

from PySide6 import QtCore, QtWidgets

LOG = logging.getLogger(__name__)

KINDS = ("success", "error")


class Snackbar(QtWidgets.QFrame):
    """Transient in-card message with a close button.

    Each card owns its own snackbar; a newer message replaces the current
    one and restarts the auto-hide timer.
    """

    closed = QtCore.Signal()

    def __init__(
        self,
        *,
        duration_ms: int = 3000,
        parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("snackbar")
        self.setProperty("kind", "success")
        self._duration_ms = max(1, int(duration_ms))
        self._kind = "success"

        self._message = QtWidgets.QLabel(self)
        self._message.setObjectName("snackbarMessage")
        self._message.setWordWrap(True)

        self._close = QtWidgets.QToolButton(self)
        self._close.setObjectName("snackbarClose")
        self._close.setText("×")
        self._close.setAutoRaise(True)
        self._close.setCursor(QtCore.Qt.PointingHandCursor)
        self._close.clicked.connect(self.dismiss)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 6, 6)
        layout.setSpacing(8)
        layout.addWidget(self._message, 1)
        layout.addWidget(self._close)

        self._timer = QtCore.QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.dismiss)

        self.hide()

    @property
    def kind(self) -> str:
        return self._kind

    def message(self) -> str:
        return self._message.text()

    def show_message(self, message: str, kind: str = "success") -> None:
        if kind not in KINDS:
            raise ValueError(f"unknown snackbar kind: {kind!r}")
        self._kind = kind
        self._message.setText(message)
        self.setProperty("kind", kind)
        # re-polish so the [kind=...] stylesheet selector is re-evaluated
        self.style().unpolish(self)
        self.style().polish(self)
        self.adjustSize()
        self.reposition()
        self.show()
        self.raise_()
        self._timer.start(self._duration_ms)
        LOG.debug("Snackbar (%s): %s", kind, message)

    @QtCore.Slot()
    def dismiss(self) -> None:
        self._timer.stop()
        was_visible = self.isVisible()
        self.hide()
        self._message.clear()
        if was_visible:
            self.closed.emit()

    def reposition(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        margin = 12
        x = max(margin, parent.width() - self.width() - margin)
        self.move(x, margin)
