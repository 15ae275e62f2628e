"""
Layout and painting of a quote onto a black viewport.
"""

from __future__ import annotations

import math
from typing import Optional

from PySide6.QtCore import QRect, QRectF, Qt
from PySide6.QtGui import QColor, QFont, QFontDatabase, QFontMetricsF, QPainter

from core.quote_deck import Quote

DEFAULT_MARGIN = 40
_TEXT_FLAGS = Qt.AlignmentFlag.AlignLeft.value | Qt.AlignmentFlag.AlignTop.value | Qt.TextFlag.TextWordWrap.value
_UNBOUNDED_HEIGHT = 1_000_000


def quote_font(point_size: int) -> QFont:
    font = QFontDatabase.systemFont(QFontDatabase.SystemFont.GeneralFont)
    font.setPointSize(point_size)
    return font


def layout_quote(text: str, font: QFont, width: float, height: float, margin: int = DEFAULT_MARGIN) -> QRectF:
    """
    Return the wrapped bounding box of ``text`` centered in the viewport.

    Wrapping is constrained to ``width - 2 * margin``.
    """
    available_width = max(1.0, width - margin * 2)
    metrics = QFontMetricsF(font)
    bounds = metrics.boundingRect(
        QRectF(0, 0, available_width, _UNBOUNDED_HEIGHT),
        _TEXT_FLAGS,
        text,
    )
    text_width = math.ceil(bounds.width())
    text_height = math.ceil(bounds.height())
    x = (width - text_width) / 2
    y = (height - text_height) / 2
    return QRectF(x, y, text_width, text_height)


def render_quote(
    painter: QPainter,
    width: int,
    height: int,
    quote: Optional[Quote],
    font_size: int,
    margin: int = DEFAULT_MARGIN,
) -> Optional[QRectF]:
    """Paint ``quote`` centered on black; returns the text box, if any."""
    painter.fillRect(QRect(0, 0, width, height), QColor(Qt.GlobalColor.black))
    if quote is None:
        return None

    font = quote_font(font_size)
    text_rect = layout_quote(quote.display_text, font, width, height, margin)
    painter.setFont(font)
    painter.setPen(QColor(Qt.GlobalColor.white))
    painter.drawText(text_rect, _TEXT_FLAGS, quote.display_text)
    return text_rect
