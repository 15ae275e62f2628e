"""
quote_saver package.

Hosts the quote display surfaces the way a screensaver framework would and
owns the application-wide logging setup.
"""

__all__ = [
    "host",
    "logger",
]
