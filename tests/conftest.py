"""Shared fixtures for the Qt-backed tests."""

import os

import pytest

# No display is needed for dialogs that are never shown
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


@pytest.fixture(scope='session')
def qapp():
    """One QApplication for the whole session."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
