"""
CryptoCompare news source.

This module provides the CryptoCompareSource class, which fetches the latest
news listing and maps its records into the canonical Article shape.
"""

import datetime
import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests
from crypto_news.errors import CancelledFetch, FetchError
from crypto_news.models import Article, ArticleMetadata, Currency, Votes, empty_votes
from crypto_news.services.cancellation import CancellationToken
from crypto_news.sources.base import NewsSource

logger = logging.getLogger(__name__)

NEWS_PATH = "/data/v2/news/"
NO_DESCRIPTION = "No description available."
WORDS_PER_MINUTE = 200
MAX_CURRENCIES = 5
MAX_TAGS = 12

# Generic category names the provider mixes in with tickers.
CATEGORY_STOPLIST = frozenset(
    [
        "MARKET",
        "TRADING",
        "CRYPTOCURRENCY",
        "BLOCKCHAIN",
        "REGULATION",
        "POLITICS",
        "TECHNOLOGY",
        "BUSINESS",
        "NFT",
        "DEFI",
        "MINING",
        "EXCHANGE",
        "ALTCOIN",
        "STABLECOIN",
        "SECURITY",
        "ANALYSIS",
    ]
)

_CATEGORY_TICKER = re.compile(r"^[A-Z0-9]{2,8}$")
_TEXT_TICKER = re.compile(r"\b[A-Z]{2,5}\b")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_TAG_SEPARATORS = re.compile(r"[|,]")


def make_slug(title: str) -> str:
    """Lowercases the title and collapses non-alphanumeric runs to hyphens."""
    return _NON_ALNUM.sub("-", title.lower()).strip("-")


def safe_hostname(url: str) -> str:
    """Returns the URL's hostname, or an empty string if it can't be parsed."""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def estimate_reading_time(text: str) -> Optional[str]:
    """Estimates reading time at 200 words per minute."""
    words = len(text.split())
    if not words:
        return None
    # Round half up, never below one minute
    minutes = max(1, int(words / WORDS_PER_MINUTE + 0.5))
    return f"{minutes} min read"


def parse_tags(raw: Optional[str]) -> Optional[List[str]]:
    """Splits a pipe- or comma-delimited tag field into unique tags."""
    if not raw:
        return None
    tags: List[str] = []
    for token in _TAG_SEPARATORS.split(raw):
        token = token.strip()
        if token and token not in tags:
            tags.append(token)
    return tags[:MAX_TAGS] or None


def extract_currencies(
    categories: Optional[str], title: str, body: str
) -> List[Currency]:
    """Best-effort ticker extraction from categories, then from free text."""
    codes: List[str] = []

    for token in (categories or "").split("|"):
        token = token.strip()
        if not _CATEGORY_TICKER.match(token) or token in CATEGORY_STOPLIST:
            continue
        if token not in codes:
            codes.append(token)

    # Categories had no tickers, so scan the text instead
    if not codes:
        for match in _TEXT_TICKER.findall(f"{title} {body}"):
            if match in CATEGORY_STOPLIST or match in codes:
                continue
            codes.append(match)
            if len(codes) >= MAX_CURRENCIES:
                break

    return [
        Currency(code=code, title=code, slug=code, url="")
        for code in codes[:MAX_CURRENCIES]
    ]


def _count(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _parse_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip(), 10)
        except ValueError:
            return None
    return None


def _parse_published(value: Any) -> Optional[datetime.datetime]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.datetime.fromtimestamp(value, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def normalize_record(raw: Dict[str, Any]) -> Optional[Article]:
    """Maps a raw provider record to an Article, or None if it is unusable."""
    if not isinstance(raw, dict):
        return None

    article_id = _parse_id(raw.get("id"))
    title = str(raw.get("title") or "").strip()
    url = str(raw.get("url") or "").strip()
    published_at = _parse_published(raw.get("published_on"))
    if article_id is None or not title or not url or published_at is None:
        return None

    body = str(raw.get("body") or "")
    description = (body or title).strip() or NO_DESCRIPTION
    source_info = raw.get("source_info")
    author = source_info.get("name") if isinstance(source_info, dict) else None

    votes: Votes = empty_votes()
    votes["positive"] = _count(raw.get("upvotes"))
    votes["negative"] = _count(raw.get("downvotes"))

    return Article(
        id=article_id,
        title=title,
        slug=make_slug(title),
        published_at=published_at,
        url=url,
        currencies=extract_currencies(raw.get("categories"), title, body),
        domain=safe_hostname(url),
        votes=votes,
        metadata=ArticleMetadata(
            description=description,
            image=str(raw.get("imageurl") or ""),
            author=author or None,
            reading_time=estimate_reading_time(description),
            tags=parse_tags(raw.get("tags")),
        ),
    )


class CryptoCompareSource(NewsSource):
    """Fetches the English news listing from the CryptoCompare API."""

    def __init__(
        self,
        base_url: str,
        lang: str = "EN",
        timeout: float = 15,
        max_articles: int = 50,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.lang = lang
        self.timeout = timeout
        self.max_articles = max_articles
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{NEWS_PATH}"

    def _error_reason(self, resp: requests.Response) -> str:
        """Prefers the provider's message over the bare status code."""
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("Message"):
            return str(payload["Message"])
        return f"HTTP {resp.status_code}"

    def fetch(self, token: Optional[CancellationToken] = None) -> List[Article]:
        """Fetches and normalizes the latest articles."""
        if token:
            token.raise_if_cancelled()

        try:
            resp = self.session.get(
                self.endpoint,
                params={"lang": self.lang},
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        except requests.RequestException as req_err:
            if token and token.cancelled:
                raise CancelledFetch("Fetch aborted") from req_err
            logger.error("Network error fetching news: %s", req_err)
            raise FetchError(str(req_err)) from req_err

        if token:
            token.raise_if_cancelled()

        if resp.status_code != 200:
            raise FetchError(self._error_reason(resp))

        try:
            payload = resp.json()
        except ValueError as e:
            raise FetchError("Invalid JSON response") from e

        if isinstance(payload, dict) and payload.get("Response") == "Error":
            raise FetchError(str(payload.get("Message") or "API returned an error"))

        records = payload.get("Data") if isinstance(payload, dict) else None
        if not isinstance(records, list):
            records = []

        articles: List[Article] = []
        for raw in records:
            article = normalize_record(raw)
            if article is None:
                logger.debug("Dropping malformed record: %r", raw)
                continue
            articles.append(article)

        logger.info(
            "Fetched %d records -> %d usable articles.", len(records), len(articles)
        )
        return articles[: self.max_articles]
