"""
Test Suite: Persisted quote file preference.
"""

import pytest

from core.broadcast import BROADCAST_NAME
from core.preferences_store import QUOTE_FILE_PATH_KEY, PreferencesStore, default_quote_file_path

from conftest import make_store


class TestPreferencesRoundTrip:
    def test_unset_preference_is_absent(self, preferences):
        assert preferences.get() is None

    def test_set_then_get_returns_value(self, preferences):
        preferences.set("/tmp/q.txt")

        assert preferences.get() == "/tmp/q.txt"

    def test_set_is_flushed_to_disk(self, preferences, settings_path):
        preferences.set("/tmp/flushed.txt")

        assert settings_path.exists()
        assert "/tmp/flushed.txt" in settings_path.read_text(encoding="utf-8")

    def test_other_store_sees_write(self, preferences, settings_path, bus, home):
        other = make_store(settings_path, bus, home)
        assert other.get() is None

        preferences.set("/tmp/shared.txt")

        assert other.get() == "/tmp/shared.txt"

    def test_key_name(self, preferences, settings_path):
        from PySide6.QtCore import QSettings

        preferences.set("/tmp/keyed.txt")
        raw = QSettings(str(settings_path), QSettings.Format.IniFormat)

        assert raw.value(QUOTE_FILE_PATH_KEY) == "/tmp/keyed.txt"


class TestPreferenceNotifications:
    def test_set_emits_changed_and_broadcasts_once(self, preferences, broadcasts, qtbot):
        with qtbot.waitSignal(preferences.changed, timeout=1000):
            preferences.set("/tmp/q.txt")

        assert broadcasts == [BROADCAST_NAME]

    def test_broadcast_reaches_subscribers(self, preferences, bus):
        received = []
        bus.subscribe(BROADCAST_NAME, lambda: received.append(preferences.get()))

        preferences.set("/tmp/seen.txt")

        assert received == ["/tmp/seen.txt"]


class TestDefaultPath:
    def test_prefers_desktop_file(self, home):
        desktop = home / "Desktop"
        desktop.mkdir()
        (desktop / "codeQuotes.txt").write_text("quote", encoding="utf-8")

        assert default_quote_file_path(home) == str(desktop / "codeQuotes.txt")

    def test_falls_back_to_config_and_creates_directory(self, home):
        path = default_quote_file_path(home)

        assert path == str(home / ".config" / "quotes.txt")
        assert (home / ".config").is_dir()
        assert not (home / ".config" / "quotes.txt").exists()

    def test_resolve_path_uses_default_when_unset(self, preferences, home):
        assert preferences.resolve_path() == str(home / ".config" / "quotes.txt")

    def test_resolve_path_prefers_stored_value(self, preferences):
        preferences.set("/tmp/stored.txt")

        assert preferences.resolve_path() == "/tmp/stored.txt"


class _UnavailableSettings:
    """Stands in for a QSettings whose backing store cannot be accessed."""

    def __init__(self):
        self.values = {}

    def sync(self):
        pass

    def status(self):
        from PySide6.QtCore import QSettings

        return QSettings.Status.AccessError

    def value(self, key):
        return self.values.get(key)

    def setValue(self, key, value):
        self.values[key] = value


class TestUnavailableStore:
    @pytest.fixture
    def unavailable(self, bus, home):
        return PreferencesStore(settings=_UnavailableSettings(), bus=bus, home=home)

    def test_get_reports_absent(self, unavailable):
        unavailable.set("/tmp/ignored.txt")

        assert unavailable.get() is None

    def test_resolve_path_falls_back_to_default(self, unavailable, home):
        assert unavailable.resolve_path() == str(home / ".config" / "quotes.txt")

    def test_set_still_notifies_once(self, unavailable, broadcasts, qtbot):
        with qtbot.waitSignal(unavailable.changed, timeout=1000):
            unavailable.set("/tmp/x.txt")

        assert broadcasts == [BROADCAST_NAME]
