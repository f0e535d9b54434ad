"""Application settings: persistence via JSON."""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from datetime import date

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(os.environ.get('LOCALAPPDATA', '.'), 'KeyStoreExplorer')

DEFAULT_CHECK_INTERVAL = 14  # days


@dataclass
class AutoUpdateCheckSettings:
    """When to look for a newer release on start-up."""
    enabled: bool = True
    last_check: date = field(default_factory=date.today)
    check_interval: int = DEFAULT_CHECK_INTERVAL   # days

    def to_dict(self) -> dict:
        return {
            'enabled': self.enabled,
            'last_check': self.last_check.isoformat(),
            'check_interval': self.check_interval,
        }

    @staticmethod
    def from_dict(data: dict) -> 'AutoUpdateCheckSettings':
        """Build from stored JSON, keeping defaults for missing or bad values."""
        settings = AutoUpdateCheckSettings()
        if not isinstance(data, dict):
            return settings

        enabled = data.get('enabled')
        if isinstance(enabled, bool):
            settings.enabled = enabled

        last_check = data.get('last_check')
        if isinstance(last_check, str):
            try:
                settings.last_check = date.fromisoformat(last_check)
            except ValueError:
                logger.warning("Ignoring invalid last update check date: %s", last_check)

        interval = data.get('check_interval')
        if isinstance(interval, int) and not isinstance(interval, bool) and interval >= 0:
            settings.check_interval = interval

        return settings


@dataclass
class AppSettings:
    """Persistent application settings."""
    # Paths
    data_dir: str = ""

    # Updates
    auto_update_check: AutoUpdateCheckSettings = field(default_factory=AutoUpdateCheckSettings)

    # Appearance
    window_width: int = 900
    window_height: int = 600

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR

    @staticmethod
    def load(path: str | None = None) -> 'AppSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return AppSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("settings root is not an object")
            values = {k: v for k, v in data.items()
                      if k in AppSettings.__dataclass_fields__}
            values['auto_update_check'] = AutoUpdateCheckSettings.from_dict(
                data.get('auto_update_check', {})
            )
            settings = AppSettings(**values)
            logger.info("Loaded settings from %s", path)
            return settings
        except Exception as e:
            logger.warning("Failed to load settings: %s", e)
            return AppSettings()

    def save(self, path: str | None = None):
        """Save settings to JSON."""
        if path is None:
            path = os.path.join(self.data_dir, 'settings.json')

        os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
        data = asdict(self)
        data['auto_update_check'] = self.auto_update_check.to_dict()
        try:
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            logger.info("Saved settings to %s", path)
        except Exception as e:
            logger.warning("Failed to save settings: %s", e)

    def ensure_dirs(self):
        """Create data directories if they don't exist."""
        os.makedirs(self.data_dir, exist_ok=True)
        os.makedirs(os.path.join(self.data_dir, 'logs'), exist_ok=True)
