"""Modal progress dialog shown while a manual update check runs."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QLabel, QProgressBar, QDialogButtonBox,
)

from kse.core.update_checker import UpdateChecker, get_update_worker_class
from kse.core.version import Version


class CheckUpdateDialog(QDialog):
    """Fetches the latest version on a worker thread while the user waits.

    Cancelling only discards the result; the request runs to completion.
    """

    def __init__(self, checker: UpdateChecker, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Check for Update")
        self.setModal(True)
        self.setMinimumWidth(320)

        self._latest: Version | None = None
        self._error: Exception | None = None

        layout = QVBoxLayout(self)

        label = QLabel("Checking for a newer version...")
        label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(label)

        progress = QProgressBar()
        progress.setRange(0, 0)  # Indeterminate
        progress.setTextVisible(False)
        layout.addWidget(progress)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

        # Parented to the dialog's parent so a cancelled fetch can finish
        # after the dialog is gone
        self._worker = get_update_worker_class()(checker, parent)
        self._worker.latest_fetched.connect(self._on_fetched)
        self._worker.check_failed.connect(self._on_failed)
        self._worker.finished.connect(self._worker.deleteLater)

    def start_check(self):
        """Start the fetch; call before exec()."""
        self._worker.fetch()

    def latest_version(self) -> Version | None:
        """Latest version, or None if the check failed or was cancelled."""
        return self._latest

    def error(self) -> Exception | None:
        return self._error

    def reject(self):
        self._disconnect_worker()
        super().reject()

    def _on_fetched(self, latest: Version):
        self._latest = latest
        self._disconnect_worker()
        self.accept()

    def _on_failed(self, error: Exception):
        self._error = error
        self._disconnect_worker()
        self.accept()

    def _disconnect_worker(self):
        try:
            self._worker.latest_fetched.disconnect(self._on_fetched)
            self._worker.check_failed.disconnect(self._on_failed)
        except TypeError:
            pass  # Already disconnected
