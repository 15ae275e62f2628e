"""
Persistence of the quote file preference shared by every saver process.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, QSettings, Signal

from core.broadcast import BROADCAST_NAME, BroadcastBus, LocalBroadcastBus
from quote_saver.quote_saver import logger as app_logger

_LOGGER = app_logger.get_logger()

MODULE_NAME = "QuoteSaver"
QUOTE_FILE_PATH_KEY = "QuoteFilePath"


def default_quote_file_path(home: Optional[Path] = None) -> str:
    """
    Prefer ~/Desktop/codeQuotes.txt, else ~/.config/quotes.txt.

    The ~/.config directory is created when missing; the file itself is not.
    """
    home = Path(home) if home is not None else Path.home()
    desktop_path = home / "Desktop" / "codeQuotes.txt"
    if desktop_path.exists():
        return str(desktop_path)

    config_dir = home / ".config"
    if not config_dir.exists():
        try:
            config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            _LOGGER.warning("Could not create {}: {}", config_dir, exc)
    return str(config_dir / "quotes.txt")


class PreferencesStore(QObject):
    """QSettings wrapper holding the single persisted quote file path."""

    changed = Signal()

    def __init__(
        self,
        *,
        settings: Optional[QSettings] = None,
        bus: Optional[BroadcastBus] = None,
        home: Optional[Path] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if settings is None:
            settings = QSettings(
                QSettings.Format.NativeFormat,
                QSettings.Scope.UserScope,
                MODULE_NAME,
                MODULE_NAME,
            )
        self._settings = settings
        self._bus: BroadcastBus = bus if bus is not None else LocalBroadcastBus()
        self._home = home

    @property
    def bus(self) -> BroadcastBus:
        return self._bus

    def get(self) -> Optional[str]:
        # Pick up writes made by other processes since the last read.
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            _LOGGER.warning("Preference store unavailable ({}); using defaults.", self._settings.status())
            return None
        value = self._settings.value(QUOTE_FILE_PATH_KEY)
        if value is None:
            return None
        return str(value)

    def set(self, path: str) -> None:
        self._settings.setValue(QUOTE_FILE_PATH_KEY, path)
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            _LOGGER.warning("Failed to flush quote file path {} ({}).", path, self._settings.status())
        else:
            _LOGGER.info("Quote file path set to {}", path)
        self.changed.emit()
        self._bus.post(BROADCAST_NAME)

    def default_path(self) -> str:
        return default_quote_file_path(self._home)

    def resolve_path(self) -> str:
        """Return the stored path, falling back to the computed default."""
        stored = self.get()
        return stored if stored is not None else self.default_path()
