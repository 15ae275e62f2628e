"""
Animated surface that shows a random quote and refreshes it on a timer.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Optional

from PySide6.QtCore import QTimer, Qt
from PySide6.QtGui import QPainter, QPaintEvent
from PySide6.QtWidgets import QWidget

from core.broadcast import BROADCAST_NAME, BroadcastBus, Subscription
from core.config_panel import ConfigPanel
from core.preferences_store import PreferencesStore
from core.quote_deck import Quote, QuoteDeck
from core.quote_renderer import render_quote
from core.settings import SaverSettings
from quote_saver.quote_saver import logger as app_logger


class SurfaceState(Enum):
    STOPPED = "Stopped"
    RUNNING = "Running"


class DisplaySurface(QWidget):
    """
    Screensaver view: owns the quote deck, the selection timer and the
    repaint timer, and follows preference changes from any process.
    """

    has_configure_sheet = True

    def __init__(
        self,
        preferences: PreferencesStore,
        *,
        bus: Optional[BroadcastBus] = None,
        is_preview: bool = False,
        settings: Optional[SaverSettings] = None,
        rng: Optional[random.Random] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self._preferences = preferences
        self._bus = bus if bus is not None else preferences.bus
        self._is_preview = is_preview
        self._settings = settings or SaverSettings()
        self._rng = rng or random.Random()
        self._state = SurfaceState.STOPPED
        self._needs_display = False

        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self.setCursor(Qt.CursorShape.BlankCursor)

        self._quote_file_path = preferences.resolve_path()
        self._deck = QuoteDeck.load(self._quote_file_path)
        self._current_quote: Optional[Quote] = self._deck.pick_random(self._rng)

        self._selection_timer = QTimer(self)
        self._selection_timer.setInterval(self._settings.quote_interval_ms)
        self._selection_timer.timeout.connect(self.tick)  # type: ignore[arg-type]

        self._animation_timer = QTimer(self)
        self._animation_timer.setInterval(self._settings.frame_interval_ms)
        self._animation_timer.timeout.connect(self.animate_one_frame)  # type: ignore[arg-type]

        self._preferences.changed.connect(self._on_preferences_changed)
        self._subscription: Optional[Subscription] = self._bus.subscribe(
            BROADCAST_NAME, self._on_preferences_changed
        )
        self._connected_locally = True

    @property
    def state(self) -> SurfaceState:
        return self._state

    @property
    def is_preview(self) -> bool:
        return self._is_preview

    @property
    def deck(self) -> QuoteDeck:
        return self._deck

    @property
    def current_quote(self) -> Optional[Quote]:
        return self._current_quote

    @property
    def quote_file_path(self) -> str:
        return self._quote_file_path

    @property
    def needs_display(self) -> bool:
        return self._needs_display

    @property
    def font_size(self) -> int:
        return self._settings.preview_font_size if self._is_preview else self._settings.font_size

    def start(self) -> None:
        if self._state is SurfaceState.RUNNING:
            return
        self._state = SurfaceState.RUNNING
        self._selection_timer.start()
        self._animation_timer.start()
        self._logger.info("Quote surface started (preview={}, path={})", self._is_preview, self._quote_file_path)

    def stop(self) -> None:
        if self._state is SurfaceState.STOPPED:
            return
        self._state = SurfaceState.STOPPED
        self._selection_timer.stop()
        self._animation_timer.stop()
        self._logger.info("Quote surface stopped.")

    def tick(self) -> None:
        """Selection timer body: follow preference changes and pick anew."""
        self._reload_if_path_changed()
        self._select_random_quote()
        self._needs_display = True

    def animate_one_frame(self) -> None:
        if not self._needs_display:
            return
        self._needs_display = False
        self.update()

    def update_quote_file_path(self, path: str) -> None:
        self._quote_file_path = path
        self._preferences.set(path)
        self._load_deck()
        self._select_random_quote()
        self._needs_display = True

    def configure_sheet(self, parent: Optional[QWidget] = None) -> ConfigPanel:
        return ConfigPanel(self._preferences, parent=parent)

    def teardown(self) -> None:
        """Unregister both change channels. Safe to call more than once."""
        if self._connected_locally:
            self._preferences.changed.disconnect(self._on_preferences_changed)
            self._connected_locally = False
        if self._subscription is not None:
            self._bus.unsubscribe(self._subscription)
            self._subscription = None

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802
        painter = QPainter(self)
        try:
            render_quote(
                painter,
                self.width(),
                self.height(),
                self._current_quote,
                self.font_size,
                self._settings.margin,
            )
        finally:
            painter.end()

    def closeEvent(self, event) -> None:  # noqa: N802
        self.stop()
        self.teardown()
        super().closeEvent(event)

    def _on_preferences_changed(self) -> None:
        if self._reload_if_path_changed():
            self._logger.info("Preferences changed; now showing quotes from {}", self._quote_file_path)
            self._select_random_quote()
        self._needs_display = True

    def _reload_if_path_changed(self) -> bool:
        new_path = self._preferences.resolve_path()
        if new_path == self._quote_file_path:
            return False
        self._quote_file_path = new_path
        self._load_deck()
        return True

    def _load_deck(self) -> None:
        self._deck = QuoteDeck.load(self._quote_file_path)
        self._logger.debug("Quote deck reloaded: {}", self._deck)

    def _select_random_quote(self) -> None:
        self._current_quote = self._deck.pick_random(self._rng)
