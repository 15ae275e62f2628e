"""
Logging setup for the quote saver.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as _logger

_LOG_INITIALISED = False


def _default_log_dir() -> Path:
    override = os.environ.get("QUOTE_SAVER_LOG_DIR")
    if override:
        return Path(override)
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Logs" / "QuoteSaver"
    return Path.home() / ".config" / "QuoteSaver" / "logs"


def configure(log_path: Optional[Path] = None) -> None:
    """
    Configure loguru for the application.

    Runs once per process; later calls are ignored.
    """
    global _LOG_INITIALISED
    if _LOG_INITIALISED:
        return
    target = log_path or _default_log_dir() / "quote_saver.log"

    _logger.remove()
    if sys.stderr is not None:
        _logger.add(sys.stderr, level="INFO", enqueue=True)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        # Console logging still works without a writable log directory.
        _LOG_INITIALISED = True
        return
    _logger.add(
        target,
        level="DEBUG",
        rotation="10 MB",
        retention=5,
        encoding="utf-8",
        enqueue=True,
        backtrace=True,
        diagnose=False,
    )
    _LOG_INITIALISED = True


def get_logger():
    """Return the shared logger instance."""
    configure()
    return _logger
