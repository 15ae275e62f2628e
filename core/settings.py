"""
Runtime tuning for the quote saver, read from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from quote_saver.quote_saver import logger as app_logger

_LOGGER = app_logger.get_logger()

DEFAULT_QUOTE_INTERVAL_SECONDS = 10
DEFAULT_FRAME_RATE = 30
_MIN_QUOTE_INTERVAL = 2
_MAX_QUOTE_INTERVAL = 3600
_MIN_FRAME_RATE = 1
_MAX_FRAME_RATE = 120


@dataclass(frozen=True)
class SaverSettings:
    quote_interval_seconds: int = DEFAULT_QUOTE_INTERVAL_SECONDS
    frame_rate: int = DEFAULT_FRAME_RATE
    font_size: int = 32
    preview_font_size: int = 10
    margin: int = 40

    @property
    def quote_interval_ms(self) -> int:
        return self.quote_interval_seconds * 1000

    @property
    def frame_interval_ms(self) -> int:
        return max(1, round(1000 / self.frame_rate))


def load_settings(environ: Optional[Mapping[str, str]] = None) -> SaverSettings:
    """Build settings from environment overrides, clamping invalid data."""
    env = os.environ if environ is None else environ
    return SaverSettings(
        quote_interval_seconds=_read_clamped(
            env,
            "QUOTE_SAVER_INTERVAL_SECONDS",
            DEFAULT_QUOTE_INTERVAL_SECONDS,
            _MIN_QUOTE_INTERVAL,
            _MAX_QUOTE_INTERVAL,
        ),
        frame_rate=_read_clamped(
            env,
            "QUOTE_SAVER_FRAME_RATE",
            DEFAULT_FRAME_RATE,
            _MIN_FRAME_RATE,
            _MAX_FRAME_RATE,
        ),
    )


def _read_clamped(env: Mapping[str, str], name: str, default: int, low: int, high: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-integer value {!r} for {}.", raw, name)
        return default
    if value < low or value > high:
        _LOGGER.warning(
            "Invalid value {} found for {}. Clamping to safe bounds.",
            value,
            name,
        )
    return max(low, min(high, value))
