"""Qt dialogs and browser launch used by UpdateChecker."""

import logging

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QMessageBox

from kse.branding import AppBranding
from kse.core.update_checker import BrowserLaunchError
from kse.core.version import Version

logger = logging.getLogger(__name__)


def open_in_browser(url: str):
    """Open url in the default browser. Raises BrowserLaunchError on failure."""
    if not QDesktopServices.openUrl(QUrl(url)):
        raise BrowserLaunchError(f"No browser could be launched for {url}")


class QtUpdatePrompter:
    """Message boxes shown by the update check, parented to a window."""

    def __init__(self, parent=None):
        self._parent = parent

    def show_up_to_date(self, current: Version):
        QMessageBox.information(
            self._parent, AppBranding.APP_NAME,
            f"You have the latest version of {AppBranding.APP_NAME}, {current}.",
        )

    def confirm_download(self, latest: Version) -> bool:
        reply = QMessageBox.question(
            self._parent, AppBranding.APP_NAME,
            f"A newer version of {AppBranding.APP_NAME}, {latest}, is available.\n"
            f"Would you like to visit the download page now?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        )
        return reply == QMessageBox.StandardButton.Yes

    def show_browser_failure(self, url: str):
        QMessageBox.information(
            self._parent, AppBranding.APP_NAME,
            f"Could not launch a web browser.\nPlease visit {url}",
        )

    def show_error(self, error: Exception):
        box = QMessageBox(self._parent)
        box.setIcon(QMessageBox.Icon.Critical)
        box.setWindowTitle("Error")
        box.setText("Could not check for an update.")
        box.setInformativeText(str(error))
        if error.__cause__ is not None:
            box.setDetailedText(f"{type(error.__cause__).__name__}: {error.__cause__}")
        box.exec()
