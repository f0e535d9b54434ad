"""KeyStore Explorer: entry point."""

import sys
import os
import logging

from kse.branding import AppBranding
from kse.config.settings import AppSettings


def setup_logging(data_dir: str):
    """Configure logging to file and console."""
    log_dir = os.path.join(data_dir, 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'kse.log')

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(),
        ],
    )


def main():
    # High-DPI support
    os.environ.setdefault('QT_ENABLE_HIGHDPI_SCALING', '1')

    # Load settings early (before any GUI init)
    settings = AppSettings.load()
    settings.ensure_dirs()

    setup_logging(settings.data_dir)
    logger = logging.getLogger(__name__)
    logger.info("%s %s starting", AppBranding.APP_NAME, AppBranding.VERSION)

    from PyQt6.QtWidgets import QApplication
    from kse.ui.main_window import MainWindow

    app = QApplication(sys.argv)
    app.setApplicationName(AppBranding.APP_NAME)
    app.setApplicationVersion(AppBranding.VERSION)
    app.setOrganizationName(AppBranding.PUBLISHER)

    window = MainWindow(settings)
    window.show()
    window.schedule_auto_update_check()

    exit_code = app.exec()

    # MainWindow.closeEvent() saves settings; this covers abnormal exits
    settings.save()
    logger.info("Goodbye")
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
