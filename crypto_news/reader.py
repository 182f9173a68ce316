"""
News reader controller.

This module provides the NewsReader class, which owns the application state,
runs fetches with supersede-on-retry semantics and persists saved ids.
"""

import logging
import threading
from typing import Callable, List, Optional, Sequence

from crypto_news import state as transitions
from crypto_news.errors import CancelledFetch, EmptyResultError, FetchError
from crypto_news.models import Article, FilterMode
from crypto_news.pipeline import find_article
from crypto_news.services.cancellation import CancellationToken
from crypto_news.services.saved_store import SavedIdsStore
from crypto_news.sources.base import NewsSource
from crypto_news.sources.sample import sample_articles
from crypto_news.state import AppState

logger = logging.getLogger(__name__)


class NewsReader:
    """Owns the AppState and applies transitions atomically."""

    def __init__(
        self,
        source: NewsSource,
        store: SavedIdsStore,
        fallback: Optional[Sequence[Article]] = None,
    ):
        self.source = source
        self.store = store
        self.fallback: List[Article] = list(
            fallback if fallback is not None else sample_articles()
        )
        self._lock = threading.Lock()
        self._save_lock = threading.Lock()
        self._token: Optional[CancellationToken] = None

        try:
            saved = self.store.load()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Could not load saved ids: %s", e)
            saved = []
        self.state: AppState = transitions.initial_state(self.fallback, saved)

    def _apply(
        self,
        change: Callable[[AppState], AppState],
        token: Optional[CancellationToken] = None,
    ) -> bool:
        """Applies a transition unless the token has been superseded."""
        with self._lock:
            if token is not None and (token.cancelled or token is not self._token):
                return False
            self.state = change(self.state)
            return True

    def load_news(self) -> AppState:
        """Fetches live news, falling back to the bundled set on failure."""
        token = CancellationToken()
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = token
            self.state = transitions.start_fetch(self.state)

        try:
            live = self.source.fetch(token)
            if not live:
                raise EmptyResultError("No usable articles")
            self._apply(lambda s: transitions.finish_fetch(s, live), token)
            logger.info("Loaded %d live articles.", len(live))
        except CancelledFetch:
            logger.info("Fetch superseded; discarding result.")
        except EmptyResultError:
            logger.warning("Live news returned no articles. Using sample set.")
            self._apply(
                lambda s: transitions.fail_fetch(
                    s, transitions.EMPTY_RESULT_MESSAGE, self.fallback
                ),
                token,
            )
        except FetchError as e:
            logger.error("Error fetching live news: %s", e.reason)
            self._apply(
                lambda s: transitions.fail_fetch(
                    s, transitions.failure_message(e.reason), self.fallback
                ),
                token,
            )
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Unexpected error fetching live news: %s", e)
            reason = str(e) or "Unknown error"
            self._apply(
                lambda s: transitions.fail_fetch(
                    s, transitions.failure_message(reason), self.fallback
                ),
                token,
            )
        finally:
            self._apply(transitions.end_fetch, token)

        return self.state

    def toggle_saved(self, article_id: int) -> bool:
        """Toggles a saved id, persists the full list and returns the new flag.

        Toggles are serialized so the store always holds the latest list. If
        the write fails the toggle is rolled back.
        """
        with self._save_lock:
            with self._lock:
                previous = self.state.saved_ids
                self.state = transitions.toggle_saved(self.state, article_id)
                saved_ids = self.state.saved_ids
            try:
                self.store.save(saved_ids)
            except Exception as e:  # pylint: disable=broad-exception-caught
                logger.error("Could not persist saved ids: %s", e)
                self._apply(lambda s: transitions.set_saved_ids(s, previous))
                return article_id in previous
        return article_id in saved_ids

    def is_saved(self, article_id: int) -> bool:
        return article_id in self.state.saved_ids

    def set_filter(self, mode: FilterMode) -> None:
        self._apply(lambda s: transitions.set_filter(s, mode))

    def set_query(self, query: str) -> None:
        self._apply(lambda s: transitions.set_query(s, query))

    def toggle_theme(self) -> None:
        self._apply(transitions.toggle_theme)

    def dismiss_error(self) -> None:
        self._apply(transitions.dismiss_error)

    def visible(self) -> List[Article]:
        return transitions.visible_articles(self.state)

    def article(self, article_id: int) -> Optional[Article]:
        return find_article(self.state.articles, article_id)
