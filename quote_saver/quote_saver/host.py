"""
Screensaver host driving quote surfaces through their lifecycle.

Plays the role a platform screensaver framework plays for a saver module:
it constructs one surface per screen, starts and stops them, hands out the
options sheet, and dismisses everything on user input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from PySide6.QtCore import QEvent, QObject, QPoint, QRect
from PySide6.QtGui import QGuiApplication, QScreen
from PySide6.QtWidgets import QApplication

from core.broadcast import BroadcastBus, create_default_bus
from core.config_panel import ConfigPanel
from core.display_surface import DisplaySurface
from core.preferences_store import PreferencesStore
from core.settings import SaverSettings, load_settings
from quote_saver.quote_saver import logger as app_logger

PREVIEW_SIZE = (400, 250)
MOUSE_DISMISS_DISTANCE = 10

_DISMISS_EVENTS = {
    QEvent.Type.KeyPress,
    QEvent.Type.MouseButtonPress,
    QEvent.Type.Wheel,
}


@dataclass(eq=False)
class ScreenSaverHost(QObject):
    bus: Optional[BroadcastBus] = None
    preferences: Optional[PreferencesStore] = None
    settings: SaverSettings = field(default_factory=load_settings)
    quit_on_dismiss: bool = True

    def __post_init__(self) -> None:
        super().__init__()
        self._logger = app_logger.get_logger()
        if self.bus is None:
            self.bus = create_default_bus()
        if self.preferences is None:
            self.preferences = PreferencesStore(bus=self.bus)
        self._surfaces: List[DisplaySurface] = []
        self._dismiss_on_input = False
        self._mouse_origin: Optional[QPoint] = None

    @property
    def surfaces(self) -> List[DisplaySurface]:
        return list(self._surfaces)

    def create_surface(self, *, is_preview: bool = False) -> DisplaySurface:
        surface = DisplaySurface(
            self.preferences,
            bus=self.bus,
            is_preview=is_preview,
            settings=self.settings,
        )
        self._surfaces.append(surface)
        return surface

    def run_fullscreen(self, screens: Optional[List[QScreen]] = None) -> None:
        """Cover every screen and exit on the first user input."""
        self._dismiss_on_input = True
        for screen in screens or QGuiApplication.screens():
            surface = self.create_surface()
            surface.setMouseTracking(True)
            surface.installEventFilter(self)
            geometry: QRect = screen.geometry()
            surface.setGeometry(geometry)
            surface.showFullScreen()
            surface.start()
        self._logger.info("Screensaver running on {} screen(s).", len(self._surfaces))

    def run_windowed(self, *, is_preview: bool = False) -> DisplaySurface:
        surface = self.create_surface(is_preview=is_preview)
        surface.setWindowTitle("Quote Saver")
        if is_preview:
            surface.resize(*PREVIEW_SIZE)
        else:
            surface.resize(1024, 640)
        surface.show()
        surface.start()
        return surface

    def show_configuration(self, surface: Optional[DisplaySurface] = None) -> ConfigPanel:
        """Return the options panel, obtained from a surface as a host would."""
        if surface is None:
            panel = ConfigPanel(self.preferences)
        elif surface.has_configure_sheet:
            panel = surface.configure_sheet()
        else:
            raise RuntimeError("Surface does not offer a configuration sheet.")
        panel.finished.connect(self._on_configuration_finished)
        panel.open()
        return panel

    def dismiss(self) -> None:
        for surface in self._surfaces:
            surface.stop()
            surface.teardown()
            surface.close()
        self._surfaces.clear()
        self._quit()

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if not self._dismiss_on_input:
            return False
        if event.type() in _DISMISS_EVENTS:
            self._logger.debug("User input detected; dismissing screensaver.")
            self.dismiss()
            return True
        if event.type() == QEvent.Type.MouseMove:
            position = event.globalPosition().toPoint()
            if self._mouse_origin is None:
                self._mouse_origin = position
            elif (position - self._mouse_origin).manhattanLength() > MOUSE_DISMISS_DISTANCE:
                self.dismiss()
                return True
        return False

    def _on_configuration_finished(self, result: int) -> None:
        if not self._surfaces:
            self._quit()

    def _quit(self) -> None:
        if not self.quit_on_dismiss:
            return
        app = QApplication.instance()
        if app is not None:
            app.quit()
