"""
Data models for the Crypto News Reader application.
"""

from datetime import datetime
from enum import Enum
from typing import TypedDict, Optional, List


class Currency(TypedDict):
    """A ticker-like token associated with an article."""

    code: str
    title: str
    slug: str
    url: str


class Votes(TypedDict):
    """Named vote counters. All default to 0 and are never negative."""

    positive: int
    negative: int
    important: int
    liked: int
    disliked: int
    funny: int
    toxic: int
    saved_count: int
    comments: int


class ArticleMetadata(TypedDict):
    """Display metadata for an article."""

    description: str
    image: str
    author: Optional[str]
    reading_time: Optional[str]  # e.g. "3 min read"
    tags: Optional[List[str]]


class Article(TypedDict):
    """Type definition for a normalized news article."""

    id: int
    title: str
    slug: str
    published_at: datetime
    url: str
    currencies: List[Currency]
    domain: str
    votes: Votes
    metadata: ArticleMetadata


class FilterMode(str, Enum):
    """Named view selection controlling predicate and sort order."""

    RISING = "rising"
    HOT = "hot"
    BULLISH = "bullish"
    BEARISH = "bearish"
    IMPORTANT = "important"
    SAVED = "saved"

    @classmethod
    def parse(cls, value: Optional[str], default: "FilterMode") -> "FilterMode":
        """Parses user input, falling back to the default on unknown values."""
        if not value:
            return default
        try:
            return cls(value.strip().lower())
        except ValueError:
            return default


def empty_votes() -> Votes:
    """Returns a Votes record with every counter at zero."""
    return Votes(
        positive=0,
        negative=0,
        important=0,
        liked=0,
        disliked=0,
        funny=0,
        toxic=0,
        saved_count=0,
        comments=0,
    )
