"""Main application window."""

import logging
from datetime import date

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QLabel

from kse.branding import AppBranding
from kse.config.settings import AppSettings
from kse.core.update_checker import (
    UpdateChecker, get_update_worker_class, wait_for_update_workers,
)
from kse.core.version import Version
from kse.ui.check_update_dialog import CheckUpdateDialog
from kse.ui.settings_dialog import SettingsDialog
from kse.ui.update_prompter import QtUpdatePrompter, open_in_browser

logger = logging.getLogger(__name__)

# Delay before the start-up update check, so the window is painted first
AUTO_CHECK_DELAY_MS = 2000

# Retry delay for an automatic report that arrives while another is showing
REPORT_RETRY_MS = 500


class MainWindow(QMainWindow):
    """KeyStore Explorer main window."""

    def __init__(self, settings: AppSettings):
        super().__init__()
        self._settings = settings
        self._reporting = False

        self._checker = UpdateChecker(
            current_version=Version.parse(AppBranding.VERSION),
            prompter=QtUpdatePrompter(self),
            browser_launcher=open_in_browser,
        )

        self._update_worker = get_update_worker_class()(self._checker, self)
        self._update_worker.latest_fetched.connect(self._on_auto_check_fetched)
        self._update_worker.finished.connect(self._on_auto_check_finished)

        self._setup_ui()

    def _setup_ui(self):
        self.setWindowTitle(AppBranding.window_title())
        self.setMinimumSize(640, 400)
        self.resize(self._settings.window_width, self._settings.window_height)

        self._create_menus()

        # Status bar
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_label = QLabel("Ready")
        self._status_bar.addWidget(self._status_label, 1)

    def _create_menus(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        quit_action = QAction("E&xit", self)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        tools_menu = menu_bar.addMenu("&Tools")
        prefs_action = QAction("&Preferences...", self)
        prefs_action.setStatusTip("Change application preferences")
        prefs_action.triggered.connect(self._on_settings)
        tools_menu.addAction(prefs_action)

        help_menu = menu_bar.addMenu("&Help")
        self._check_update_action = QAction("Check for &Update...", self)
        self._check_update_action.setStatusTip(
            f"Check whether a newer version of {AppBranding.APP_NAME} is available"
        )
        self._check_update_action.setToolTip("Check for an update")
        self._check_update_action.triggered.connect(self._on_check_update)
        help_menu.addAction(self._check_update_action)

    # ── Update check ─────────────────────────────────────────────────

    def schedule_auto_update_check(self):
        """Run the throttled update check once the event loop is up."""
        QTimer.singleShot(AUTO_CHECK_DELAY_MS, self._start_auto_update_check)

    def _start_auto_update_check(self):
        self._update_worker.auto_check(self._settings.auto_update_check, date.today())

    def _on_auto_check_fetched(self, latest: Version):
        if self._reporting:
            QTimer.singleShot(REPORT_RETRY_MS, lambda: self._on_auto_check_fetched(latest))
            return
        self._reporting = True
        try:
            self._checker.report_auto_check(latest)
        finally:
            self._reporting = False

    def _on_auto_check_finished(self):
        # last_check may have moved forward
        self._settings.save()

    def _on_check_update(self):
        if self._reporting:
            return
        self._reporting = True
        try:
            self._run_manual_check()
        finally:
            self._reporting = False

    def _run_manual_check(self):
        dialog = CheckUpdateDialog(self._checker, self)
        dialog.start_check()
        dialog.exec()

        if dialog.error() is not None:
            self._checker.prompter.show_error(dialog.error())
            return

        latest = dialog.latest_version()
        if latest is None:
            logger.info("Update check cancelled")
            return

        self._checker.compare_and_report(latest, automatic=False)

    # ── Settings ─────────────────────────────────────────────────────

    def _on_settings(self):
        dialog = SettingsDialog(self, self._settings)
        if dialog.exec():
            self._settings = dialog.get_settings()
            self._settings.save()

    def closeEvent(self, event):
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        self._settings.save()
        # Includes fetches of cancelled manual checks, which stay parented here
        wait_for_update_workers(self, int(self._checker.timeout * 1000) + 5000)
        super().closeEvent(event)
