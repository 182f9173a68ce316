"""
Application state and its transitions.

AppState is immutable. Every transition is a pure function returning a new
state, so the controller can swap states atomically.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from crypto_news.models import Article, FilterMode
from crypto_news.pipeline import select

EMPTY_RESULT_MESSAGE = "Live news API returned no articles. Showing sample articles."


def failure_message(reason: str) -> str:
    return f"Live news unavailable ({reason}). Showing sample articles."


@dataclass(frozen=True)
class AppState:
    """Centrally owned UI state."""

    articles: Tuple[Article, ...] = ()
    filter_mode: FilterMode = FilterMode.HOT
    query: str = ""
    saved_ids: Tuple[int, ...] = field(default_factory=tuple)
    loading: bool = False
    error: Optional[str] = None  # Banner text
    dark_mode: bool = False


def initial_state(
    articles: Sequence[Article] = (), saved_ids: Sequence[int] = ()
) -> AppState:
    # Starts in the loading state; the first fetch clears it
    return AppState(
        articles=tuple(articles),
        saved_ids=tuple(dict.fromkeys(saved_ids)),
        loading=True,
    )


def start_fetch(state: AppState) -> AppState:
    return replace(state, loading=True, error=None)


def finish_fetch(state: AppState, articles: Sequence[Article]) -> AppState:
    """Replaces the article list wholesale."""
    return replace(state, articles=tuple(articles), error=None)


def fail_fetch(
    state: AppState, message: str, fallback: Sequence[Article]
) -> AppState:
    return replace(state, articles=tuple(fallback), error=message)


def end_fetch(state: AppState) -> AppState:
    return replace(state, loading=False)


def toggle_saved(state: AppState, article_id: int) -> AppState:
    if article_id in state.saved_ids:
        saved = tuple(i for i in state.saved_ids if i != article_id)
    else:
        saved = state.saved_ids + (article_id,)
    return replace(state, saved_ids=saved)


def set_saved_ids(state: AppState, saved_ids: Sequence[int]) -> AppState:
    return replace(state, saved_ids=tuple(saved_ids))


def set_filter(state: AppState, mode: FilterMode) -> AppState:
    return replace(state, filter_mode=mode)


def set_query(state: AppState, query: str) -> AppState:
    return replace(state, query=query)


def toggle_theme(state: AppState) -> AppState:
    return replace(state, dark_mode=not state.dark_mode)


def dismiss_error(state: AppState) -> AppState:
    return replace(state, error=None)


def visible_articles(state: AppState) -> List[Article]:
    return select(state.articles, state.filter_mode, state.query, state.saved_ids)
