"""
Core components of the quote saver: preferences, broadcasts, quotes and views.
"""

from .broadcast import BROADCAST_NAME, LocalBroadcastBus  # noqa: F401
from .preferences_store import PreferencesStore  # noqa: F401
from .quote_deck import Quote, QuoteDeck  # noqa: F401
