"""
Exception types raised while fetching news.

The adapter only raises for transport-level or whole-response failures.
Single malformed records are dropped silently and never surface here.
"""


class NewsReaderError(Exception):
    """Base class for all reader errors."""


class FetchError(NewsReaderError):
    """Network, timeout, non-200 or provider-reported failure."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EmptyResultError(NewsReaderError):
    """The fetch succeeded but yielded zero usable articles."""


class CancelledFetch(NewsReaderError):
    """The request was superseded by a newer one."""
