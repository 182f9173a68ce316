"""
Cancellation tokens for superseding in-flight fetches.
"""

import threading

from crypto_news.errors import CancelledFetch


class CancellationToken:
    """A one-shot flag passed into a fetch and checked before any mutation."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raises CancelledFetch if the token has been cancelled."""
        if self._event.is_set():
            raise CancelledFetch("Fetch superseded by a newer request")
