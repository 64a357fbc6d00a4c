"""Qt file choosers and browser launching for desktop use (``gui`` extra)."""

from __future__ import annotations

import logging
import webbrowser
from pathlib import Path
from typing import Optional

from PyQt6 import QtWidgets
from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices

logger = logging.getLogger(__name__)


def ensure_application() -> QtWidgets.QApplication:
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app


class QtDirectoryAccess:
    """Directory access backed by ``QFileDialog.getExistingDirectory``."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None, start_dir: str = "") -> None:
        self.parent = parent
        self.start_dir = start_dir or str(Path.home())

    def supported(self) -> bool:
        return True

    def request_directory(self) -> Optional[Path]:
        ensure_application()
        out_dir = QtWidgets.QFileDialog.getExistingDirectory(self.parent, "Export bundle", self.start_dir)
        if not out_dir:
            return None
        return Path(out_dir)


def ask_archive_path(
    parent: Optional[QtWidgets.QWidget] = None,
    suggested_name: str = "",
) -> Optional[Path]:
    ensure_application()
    out_zip, _ = QtWidgets.QFileDialog.getSaveFileName(
        parent,
        "Save ZIP as…",
        suggested_name,
        "ZIP archive (*.zip)",
    )
    if not out_zip:
        return None
    if not out_zip.lower().endswith(".zip"):
        out_zip += ".zip"
    return Path(out_zip)


class QtBrowserLauncher:
    """Open a URL using the desktop services with a webbrowser fallback."""

    def __call__(self, url: str) -> bool:
        ensure_application()
        qurl = QUrl(url)
        if qurl.isValid() and QDesktopServices.openUrl(qurl):
            return True
        logger.debug("Desktop services refused %s, trying webbrowser", url)
        return bool(webbrowser.open(url))
