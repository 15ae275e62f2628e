"""
Entry point for the quote saver.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, Sequence

from PySide6.QtWidgets import QApplication

from quote_saver.quote_saver import logger as app_logger
from quote_saver.quote_saver.host import ScreenSaverHost

_LOGGER = app_logger.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="quote-saver", description="Display random quotes from a text file.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--config", action="store_true", help="show the options panel and exit")
    mode.add_argument("--preview", action="store_true", help="run in a small preview window")
    mode.add_argument("--window", action="store_true", help="run in a regular window")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Launch the saver in the requested mode."""
    args_list: List[str] = list(sys.argv[1:] if argv is None else argv)
    args, qt_args = _build_parser().parse_known_args(args_list)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName("QuoteSaver")
    app.setOrganizationName("QuoteSaver")
    host = ScreenSaverHost()

    if args.config:
        _LOGGER.debug("Opening options panel.")
        host.show_configuration()
    elif args.preview:
        host.run_windowed(is_preview=True)
    elif args.window:
        host.run_windowed()
    else:
        host.run_fullscreen()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
