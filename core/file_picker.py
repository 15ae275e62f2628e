"""
Quote file selection helper for the configuration panel.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QWidget


@dataclass
class QuoteFilePicker:
    """Wraps QFileDialog interaction for choosing a single plain-text file."""

    title: str = "Choose Quote File"
    filters: str = "Text Files (*.txt)"

    def pick_quote_file(self, parent: Optional[QWidget] = None, start_path: str = "") -> Optional[Path]:
        file_path, _ = QFileDialog.getOpenFileName(
            parent,
            self.title,
            start_path,
            self.filters,
        )
        if not file_path:
            return None
        return Path(file_path)
