"""
Options dialog for choosing the quote file.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.file_picker import QuoteFilePicker
from core.preferences_store import PreferencesStore
from quote_saver.quote_saver import logger as app_logger


class PanelState(Enum):
    OPEN = "Open"
    CLOSED = "Closed"


class PresentationMode(Enum):
    SHEET = "Sheet"
    MODAL = "Modal"
    WINDOW = "Window"


class ConfigPanel(QDialog):
    """Collects the quote file path and persists it on OK."""

    def __init__(
        self,
        preferences: PreferencesStore,
        *,
        picker: Optional[QuoteFilePicker] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = app_logger.get_logger()
        self._preferences = preferences
        self._picker = picker or QuoteFilePicker()
        self._state = PanelState.OPEN
        self.setWindowTitle("Quote Saver Options")
        self.setMinimumWidth(500)
        self._build_ui()

        self._pending_path = preferences.resolve_path()
        self._path_edit.setText(self._pending_path)

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(10)
        layout.addWidget(QLabel("Quote File Path:"))

        path_row = QHBoxLayout()
        self._path_edit = QLineEdit()
        self._path_edit.setObjectName("QuoteFilePathEdit")
        self._path_edit.textChanged.connect(self._on_path_edited)
        self._browse_button = QPushButton("Browse…")
        self._browse_button.clicked.connect(self.browse)
        path_row.addWidget(self._path_edit, 1)
        path_row.addWidget(self._browse_button)
        layout.addLayout(path_row)
        layout.addStretch()

        button_row = QHBoxLayout()
        button_row.addStretch()
        self._ok_button = QPushButton("OK")
        self._ok_button.setDefault(True)
        self._ok_button.clicked.connect(self.confirm)
        self._cancel_button = QPushButton("Cancel")
        self._cancel_button.clicked.connect(self.dismiss)
        button_row.addWidget(self._ok_button)
        button_row.addWidget(self._cancel_button)
        layout.addLayout(button_row)

    @property
    def state(self) -> PanelState:
        return self._state

    @property
    def pending_path(self) -> str:
        return self._pending_path

    @property
    def path_edit(self) -> QLineEdit:
        return self._path_edit

    @property
    def presentation_mode(self) -> PresentationMode:
        if self.windowType() == Qt.WindowType.Sheet and self.parentWidget() is not None:
            return PresentationMode.SHEET
        if self.isModal():
            return PresentationMode.MODAL
        return PresentationMode.WINDOW

    def browse(self) -> None:
        chosen = self._picker.pick_quote_file(self, str(Path(self._pending_path).parent))
        if chosen is None:
            return
        self._pending_path = str(chosen)
        self._path_edit.setText(self._pending_path)

    def confirm(self) -> None:
        if self._state is PanelState.CLOSED:
            return
        self._logger.info("Options confirmed with quote file {}", self._pending_path)
        self._preferences.set(self._pending_path)
        self._close_window(QDialog.DialogCode.Accepted.value)

    def dismiss(self) -> None:
        self._logger.debug("Options dismissed without changes.")
        self._close_window(QDialog.DialogCode.Rejected.value)

    def reject(self) -> None:
        # Escape key and the window close button land here.
        if self._state is PanelState.OPEN:
            self.dismiss()

    def _on_path_edited(self, text: str) -> None:
        self._pending_path = text

    def _close_window(self, result: int) -> None:
        if self._state is PanelState.CLOSED:
            return
        self._state = PanelState.CLOSED
        mode = self.presentation_mode
        if mode is PresentationMode.SHEET:
            parent = self.parentWidget()
            self.done(result)
            parent.activateWindow()
        elif mode is PresentationMode.MODAL:
            self.done(result)
        else:
            # close() would route back through reject(); hiding ends a plain window.
            self.setResult(result)
            self.hide()
