"""
Article filtering, sorting and related-article selection.

All functions here are pure: they never mutate the lists they are given.
"""

from collections import Counter
from typing import Iterable, List, Optional, Sequence, Tuple

from crypto_news.models import Article, FilterMode

BULLISH_KEYWORDS = [
    "surge",
    "rally",
    "breakout",
    "soar",
    "gain",
    "bull",
    "up",
    "higher",
    "records",
    "ath",
]
BEARISH_KEYWORDS = [
    "drop",
    "plunge",
    "sell-off",
    "crash",
    "dump",
    "bear",
    "down",
    "lower",
    "loss",
    "slump",
]
IMPORTANT_CODES = frozenset(["BTC", "ETH"])
IMPORTANT_TITLE_TERMS = ["sec", "etf", "regulat"]


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    hay = text.casefold()
    return any(n in hay for n in needles)


def matches_query(article: Article, query: str) -> bool:
    """Case-insensitive match against title, tags and currencies."""
    q = query.strip().casefold()
    if not q:
        return True
    if q in article["title"].casefold():
        return True
    if any(q in tag.casefold() for tag in article["metadata"]["tags"] or []):
        return True
    return any(
        q in c["code"].casefold() or q in c["title"].casefold()
        for c in article["currencies"]
    )


def is_important(article: Article) -> bool:
    if any(c["code"] in IMPORTANT_CODES for c in article["currencies"]):
        return True
    return _contains_any(article["title"], IMPORTANT_TITLE_TERMS)


def _sentiment_text(article: Article) -> str:
    return f"{article['title']}\n{article['metadata']['description'] or ''}"


def select(
    articles: Sequence[Article],
    mode: FilterMode,
    query: str,
    saved: Iterable[int],
) -> List[Article]:
    """Returns the visible, ordered subset of articles for a view."""
    seen = set()
    matched: List[Article] = []
    for article in articles:
        if article["id"] in seen or not matches_query(article, query):
            continue
        seen.add(article["id"])
        matched.append(article)

    if mode == FilterMode.SAVED:
        saved_ids = set(saved)
        matched = [a for a in matched if a["id"] in saved_ids]
    elif mode in (FilterMode.BULLISH, FilterMode.BEARISH):
        needles = BULLISH_KEYWORDS if mode == FilterMode.BULLISH else BEARISH_KEYWORDS
        keyword_matched = [
            a for a in matched if _contains_any(_sentiment_text(a), needles)
        ]
        # Never show an empty page just because no keyword matched
        if keyword_matched:
            matched = keyword_matched
    elif mode == FilterMode.IMPORTANT:
        matched = [a for a in matched if is_important(a)]

    if mode == FilterMode.HOT:
        return sorted(
            matched,
            key=lambda a: (a["votes"]["positive"], a["published_at"]),
            reverse=True,
        )
    return sorted(matched, key=lambda a: a["published_at"], reverse=True)


def find_article(articles: Sequence[Article], article_id: int) -> Optional[Article]:
    for article in articles:
        if article["id"] == article_id:
            return article
    return None


def related_articles(
    article: Article, articles: Sequence[Article], limit: int = 3
) -> List[Article]:
    """Articles sharing a currency code or a tag with the given one."""
    codes = {c["code"] for c in article["currencies"]}
    tags = set(article["metadata"]["tags"] or [])

    related = []
    for other in articles:
        if other["id"] == article["id"]:
            continue
        shares_currency = any(c["code"] in codes for c in other["currencies"])
        shares_tag = bool(tags.intersection(other["metadata"]["tags"] or []))
        if shares_currency or shares_tag:
            related.append(other)
            if len(related) >= limit:
                break
    return related


def trending_currencies(
    articles: Sequence[Article], limit: int = 10
) -> List[Tuple[str, int]]:
    """Most-mentioned currency codes, ties kept in order of first appearance."""
    counts: Counter = Counter()
    for article in articles:
        for currency in article["currencies"]:
            counts[currency["code"]] += 1
    return counts.most_common(limit)
