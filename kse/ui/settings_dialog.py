"""Settings dialog."""

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QSpinBox, QCheckBox, QDialogButtonBox, QTabWidget,
    QWidget, QFormLayout,
)

from kse.config.settings import AppSettings


class SettingsDialog(QDialog):
    """Application settings dialog with tabs."""

    def __init__(self, parent=None, settings: AppSettings = None):
        super().__init__(parent)
        self.setWindowTitle("Preferences")
        self.setMinimumWidth(400)
        self._settings = settings or AppSettings()

        layout = QVBoxLayout(self)

        tabs = QTabWidget()
        tabs.addTab(self._create_updates_tab(), "Updates")
        layout.addWidget(tabs)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _create_updates_tab(self) -> QWidget:
        widget = QWidget()
        form = QFormLayout(widget)
        update_settings = self._settings.auto_update_check

        self._auto_check = QCheckBox("Check for updates automatically")
        self._auto_check.setChecked(update_settings.enabled)
        form.addRow(self._auto_check)

        self._interval_spin = QSpinBox()
        self._interval_spin.setRange(0, 365)
        self._interval_spin.setSuffix(" days")
        self._interval_spin.setSpecialValueText("Every start")  # 0 days
        self._interval_spin.setValue(min(update_settings.check_interval, 365))
        self._shown_interval = self._interval_spin.value()
        self._interval_spin.setEnabled(update_settings.enabled)
        form.addRow("Check every:", self._interval_spin)

        self._auto_check.toggled.connect(self._interval_spin.setEnabled)

        return widget

    def get_settings(self) -> AppSettings:
        """Return updated settings."""
        self._settings.auto_update_check.enabled = self._auto_check.isChecked()
        # Stored intervals beyond the spin box range survive unless edited
        if self._interval_spin.value() != self._shown_interval:
            self._settings.auto_update_check.check_interval = self._interval_spin.value()
        return self._settings
