"""
Base classes and interfaces for news sources.

This module defines the contract that all news sources must follow.
"""

from typing import Protocol, List, Optional
from crypto_news.models import Article
from crypto_news.services.cancellation import CancellationToken


class NewsSource(Protocol):
    """
    Protocol for news sources.

    Classes implementing this protocol fetch articles from a remote endpoint
    and return them normalized, most-recent-first.
    """

    def fetch(self, token: Optional[CancellationToken] = None) -> List[Article]:
        """Fetches and normalizes the latest articles."""
