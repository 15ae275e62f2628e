"""
Pytest configuration and fixtures for quote saver tests.
"""

import os
import sys
import tempfile
from pathlib import Path

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QUOTE_SAVER_LOG_DIR", str(Path(tempfile.gettempdir()) / "quote_saver_test_logs"))

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from PySide6.QtCore import QSettings

from core.broadcast import BROADCAST_NAME, LocalBroadcastBus
from core.preferences_store import PreferencesStore


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "prefs" / "QuoteSaver.ini"


@pytest.fixture
def bus():
    return LocalBroadcastBus()


@pytest.fixture
def broadcasts(bus):
    """Record every preference broadcast delivered on the shared bus."""
    received = []
    bus.subscribe(BROADCAST_NAME, lambda: received.append(BROADCAST_NAME))
    return received


@pytest.fixture
def home(tmp_path):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    return home_dir


def make_store(settings_path, bus, home):
    settings = QSettings(str(settings_path), QSettings.Format.IniFormat)
    return PreferencesStore(settings=settings, bus=bus, home=home)


@pytest.fixture
def preferences(settings_path, bus, home):
    return make_store(settings_path, bus, home)


@pytest.fixture
def write_quotes(tmp_path):
    """Write a quote file and return its path as a string."""

    def _write(name, content, encoding="utf-8"):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding=encoding)
        return str(path)

    return _write
