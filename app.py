# app.py
import logging
import sys

from PySide6 import QtWidgets

from config import GraphConfig
from core.samples import load_snapshot
from ui.server_card import ServerCard
from ui.themes import resolve_theme


def _select_file_dialog(parent=None):
    dlg = QtWidgets.QFileDialog(parent)
    dlg.setWindowTitle("Select server snapshot")
    dlg.setFileMode(QtWidgets.QFileDialog.ExistingFile)
    dlg.setNameFilters([
        "Snapshot Files (*.json)",
        "All Files (*)",
    ])
    if dlg.exec() == QtWidgets.QDialog.Accepted:
        files = dlg.selectedFiles()
        return files[0] if files else None
    return None


def main(
    path=None,
    *,
    config_path: str | None = None,
    theme: str | None = None,
    show_peak_marker: bool | None = None,
    verbose: bool = False,
):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    cfg = GraphConfig.load(config_path)
    if theme:
        cfg.theme = theme
    if show_peak_marker is not None:
        cfg.show_peak_marker = show_peak_marker
    app = QtWidgets.QApplication(sys.argv)

    if not path:
        path = _select_file_dialog()
        if not path:
            return 1

    try:
        snapshot = load_snapshot(path)
    except (OSError, ValueError) as exc:
        QtWidgets.QMessageBox.critical(None, "Player Graph", f"Could not load {path}:\n{exc}")
        return 1

    card = ServerCard(snapshot, config=cfg, theme=resolve_theme(cfg.theme))
    card.setWindowTitle(snapshot.name)
    card.resize(640, 300)
    card.show()
    return app.exec()


if __name__ == "__main__":
    import argparse
    p = argparse.ArgumentParser()
    p.add_argument("snapshot_path", nargs="?")
    p.add_argument("--config")
    p.add_argument("--theme")
    p.add_argument("--peak-marker", action="store_true", default=None)
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args()
    sys.exit(
        main(
            args.snapshot_path,
            config_path=args.config,
            theme=args.theme,
            show_peak_marker=args.peak_marker,
            verbose=args.verbose,
        )
    )
