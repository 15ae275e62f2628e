"""
Quote file parsing and random selection.
"""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from quote_saver.quote_saver import logger as app_logger

_LOGGER = app_logger.get_logger()

DIAGNOSTIC_AUTHOR = "QuoteSaver"
NO_CONTENT_MESSAGE = "No content found in file"


@dataclass(frozen=True)
class Quote:
    """
    One displayable quote.

    ``author`` is never populated from quote files; only diagnostic quotes
    carry a value.
    """

    text: str
    author: str = ""

    @property
    def display_text(self) -> str:
        return self.text


def parse_quotes(content: str) -> List[Quote]:
    """Split content into one quote per non-blank line, expanding literal ``\\n``."""
    quotes: List[Quote] = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        quotes.append(Quote(text=stripped.replace("\\n", "\n")))
    return quotes


class QuoteDeck:
    """Ordered, never-empty collection of quotes loaded from one file."""

    def __init__(self, quotes: Sequence[Quote], *, source_path: Optional[str] = None) -> None:
        if not quotes:
            raise ValueError("QuoteDeck requires at least one quote.")
        self._quotes: Tuple[Quote, ...] = tuple(quotes)
        self._source_path = source_path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "QuoteDeck":
        path_str = str(path)
        file_path = Path(path_str)
        # os.path.exists reports any OSError (and the empty path) as missing.
        if not path_str or not os.path.exists(path_str):
            _LOGGER.warning("Quote file not found at {}", path_str)
            return cls.diagnostic(f"Quote file not found at: {path_str}", source_path=path_str)

        try:
            content = file_path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Failed to read quote file {}: {}", path_str, exc)
            return cls.diagnostic(f"Error reading quote file: {_describe(exc)}", source_path=path_str)

        quotes = parse_quotes(content)
        if not quotes:
            _LOGGER.warning("Quote file {} has no usable lines.", path_str)
            return cls.diagnostic(NO_CONTENT_MESSAGE, source_path=path_str)

        _LOGGER.debug("Loaded {} quotes from {}", len(quotes), path_str)
        return cls(quotes, source_path=path_str)

    @classmethod
    def diagnostic(cls, message: str, *, source_path: Optional[str] = None) -> "QuoteDeck":
        return cls([Quote(text=message, author=DIAGNOSTIC_AUTHOR)], source_path=source_path)

    @property
    def quotes(self) -> Tuple[Quote, ...]:
        return self._quotes

    @property
    def source_path(self) -> Optional[str]:
        return self._source_path

    @property
    def is_diagnostic(self) -> bool:
        return len(self._quotes) == 1 and self._quotes[0].author == DIAGNOSTIC_AUTHOR

    def pick_random(self, rng: Optional[random.Random] = None) -> Quote:
        chooser = rng if rng is not None else random
        return chooser.choice(self._quotes)

    def __len__(self) -> int:
        return len(self._quotes)

    def __iter__(self) -> Iterator[Quote]:
        return iter(self._quotes)

    def __getitem__(self, index: int) -> Quote:
        return self._quotes[index]

    def __repr__(self) -> str:
        return f"QuoteDeck(size={len(self._quotes)}, source_path={self._source_path!r})"


def _describe(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)
