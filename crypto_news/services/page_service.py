"""
Page rendering module for the news reader.

This module provides the PageRenderer class which handles:
- Rendering the list view with search, filters, banner and trending sidebar
- Rendering article detail pages with related articles
- Rendering the not-found page
"""

import datetime
from html import escape
from typing import List, Optional, Sequence, Tuple
from urllib.parse import urlencode, urlparse

from crypto_news.models import Article, FilterMode
from crypto_news.state import AppState

PREVIEW_LENGTH = 150
SAFE_LINK_SCHEMES = ("http", "https")

FILTER_LABELS = [
    (FilterMode.HOT, "Hot"),
    (FilterMode.RISING, "Rising"),
    (FilterMode.BULLISH, "Bullish"),
    (FilterMode.BEARISH, "Bearish"),
    (FilterMode.IMPORTANT, "Important"),
    (FilterMode.SAVED, "Saved"),
]


def is_web_url(url: str) -> bool:
    """Only http(s) links are rendered as clickable."""
    try:
        return urlparse(url.strip()).scheme.lower() in SAFE_LINK_SCHEMES
    except ValueError:
        return False


def time_ago(
    moment: datetime.datetime, now: Optional[datetime.datetime] = None
) -> str:
    """Coarse relative time, e.g. "5 minutes ago"."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    seconds = max(0, int((now - moment).total_seconds()))
    if seconds < 60:
        return "less than a minute ago"
    for size, unit in ((86400, "day"), (3600, "hour")):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''} ago"
    minutes = seconds // 60
    return f"{minutes} minute{'s' if minutes != 1 else ''} ago"


class PageRenderer:
    """Renders HTML pages with inline styles."""

    _STYLES = {
        "body": "font-family: 'Segoe UI', sans-serif; margin: 0; line-height: 1.6;",
        "light": "background-color: #f3f4f6; color: #111827;",
        "dark": "background-color: #111827; color: #f9fafb;",
        "nav": "display: flex; justify-content: space-between; align-items: center; padding: 16px 24px; box-shadow: 0 1px 4px rgba(0,0,0,.15);",
        "main": "max-width: 1100px; margin: 0 auto; padding: 24px;",
        "grid": "display: grid; grid-template-columns: 2fr 1fr; gap: 32px;",
        "banner": "border: 1px solid #fcd34d; background-color: #fffbeb; color: #78350f; border-radius: 8px; padding: 12px 16px; margin-bottom: 24px;",
        "card": "border-radius: 8px; box-shadow: 0 2px 8px rgba(0,0,0,.12); margin-bottom: 24px; overflow: hidden;",
        "card_body": "padding: 20px;",
        "image": "width: 100%; height: 12rem; object-fit: cover;",
        "badge": "display: inline-block; padding: 2px 10px; margin-right: 6px; background-color: #dbeafe; color: #1e40af; border-radius: 999px; font-size: 13px;",
        "tag": "display: inline-block; padding: 2px 10px; margin-right: 6px; background-color: #e5e7eb; color: #374151; border-radius: 999px; font-size: 13px;",
        "title_link": "text-decoration: none; color: #0078D4;",
        "meta": "font-size: 13px; color: #6b7280;",
        "filter": "margin-right: 12px; text-decoration: none; color: #0078D4;",
        "filter_active": "margin-right: 12px; text-decoration: none; font-weight: bold; color: #111827;",
        "empty": "text-align: center; padding: 32px; color: #6b7280;",
        "inline_form": "display: inline;",
    }

    def __init__(self, now: Optional[datetime.datetime] = None):
        self._now = now

    def _page(self, title: str, dark_mode: bool, content: str) -> str:
        theme = "dark" if dark_mode else "light"
        style = f"{self._STYLES['body']} {self._STYLES[theme]}"
        toggle_label = "Light mode" if dark_mode else "Dark mode"
        return f"""<!DOCTYPE html>
<html data-theme="{theme}">
<head><meta charset="utf-8"><title>{escape(title)}</title></head>
<body style="{style}">
    <nav style="{self._STYLES['nav']}">
        <h1 style="margin: 0;"><a href="/" style="{self._STYLES['title_link']}">Crypto News</a></h1>
        <form method="post" action="/theme" style="{self._STYLES['inline_form']}">
            <button type="submit">{toggle_label}</button>
        </form>
    </nav>
    <main style="{self._STYLES['main']}">
{content}
    </main>
</body>
</html>"""

    def _render_badges(self, article: Article) -> str:
        return "".join(
            f"<span style=\"{self._STYLES['badge']}\">{escape(c['code'])}</span>"
            for c in article["currencies"]
        )

    def _render_save_button(self, article: Article, saved: bool) -> str:
        label = "Unsave" if saved else "Save"
        return (
            f"<form method=\"post\" action=\"/saved/{article['id']}\" "
            f"style=\"{self._STYLES['inline_form']}\">"
            f"<button type=\"submit\">{label}</button></form>"
        )

    def _render_card(self, article: Article, saved: bool) -> str:
        image = ""
        if article["metadata"]["image"]:
            image = (
                f"<img src=\"{escape(article['metadata']['image'])}\" "
                f"alt=\"{escape(article['title'])}\" style=\"{self._STYLES['image']}\">"
            )
        preview = article["metadata"]["description"][:PREVIEW_LENGTH]
        votes = article["votes"]
        return f"""
        <div class="news-card" style="{self._STYLES['card']}">
            {image}
            <div style="{self._STYLES['card_body']}">
                <div>{self._render_badges(article)}</div>
                <h2><a href="/news/{article['id']}" style="{self._STYLES['title_link']}">{escape(article['title'])}</a></h2>
                <p>{escape(preview)}...</p>
                <div style="{self._STYLES['meta']}">
                    &#128077; {votes['positive']} &middot; &#128078; {votes['negative']}
                    &middot; &#128172; {votes['comments']}
                    &middot; {time_ago(article['published_at'], self._now)}
                    {self._render_save_button(article, saved)}
                </div>
            </div>
        </div>
        """

    def _render_filters(self, state: AppState) -> str:
        links = []
        for mode, label in FILTER_LABELS:
            params = {"filter": mode.value}
            if state.query:
                params["q"] = state.query
            style = (
                self._STYLES["filter_active"]
                if mode == state.filter_mode
                else self._STYLES["filter"]
            )
            links.append(
                f"<a href=\"/?{escape(urlencode(params))}\" style=\"{style}\">{label}</a>"
            )
        return f"<div class=\"filters\">{''.join(links)}</div>"

    def _render_banner(self, error: Optional[str]) -> str:
        if not error:
            return ""
        return f"""
        <div class="banner" style="{self._STYLES['banner']}">
            <span>{escape(error)}</span>
            <form method="post" action="/refresh" style="{self._STYLES['inline_form']}">
                <button type="submit">Retry</button>
            </form>
            <form method="post" action="/banner/dismiss" style="{self._STYLES['inline_form']}">
                <button type="submit">Dismiss</button>
            </form>
        </div>
        """

    def _render_trending(self, trending: Sequence[Tuple[str, int]]) -> str:
        rows = "".join(
            f"<li>{escape(code)} <span style=\"{self._STYLES['meta']}\">({count})</span></li>"
            for code, count in trending
        )
        return f"""
        <div style="{self._STYLES['card']} {self._STYLES['card_body']}">
            <h3>Trending Cryptocurrencies</h3>
            <ol>{rows}</ol>
        </div>
        """

    def render_list(
        self,
        state: AppState,
        visible: Sequence[Article],
        trending: Sequence[Tuple[str, int]],
    ) -> str:
        """Renders the list view."""
        if state.loading:
            cards = f"<div style=\"{self._STYLES['empty']}\">Loading...</div>"
        elif visible:
            saved = set(state.saved_ids)
            cards = "".join(self._render_card(a, a["id"] in saved) for a in visible)
        else:
            cards = (
                f"<div style=\"{self._STYLES['empty']}\">"
                "No articles found matching your criteria</div>"
            )

        content = f"""
        <form method="get" action="/" style="margin-bottom: 16px;">
            <input type="search" name="q" value="{escape(state.query)}" placeholder="Search news...">
            <input type="hidden" name="filter" value="{state.filter_mode.value}">
            <button type="submit">Search</button>
        </form>
        {self._render_filters(state)}
        {self._render_banner(state.error)}
        <div style="{self._STYLES['grid']}">
            <div>{cards}</div>
            <div>{self._render_trending(trending)}</div>
        </div>
        """
        return self._page("Crypto News", state.dark_mode, content)

    def render_detail(
        self,
        article: Article,
        related: Sequence[Article],
        saved: bool,
        dark_mode: bool = False,
    ) -> str:
        """Renders an article detail page."""
        meta = article["metadata"]
        image = ""
        if meta["image"]:
            image = (
                f"<img src=\"{escape(meta['image'])}\" alt=\"{escape(article['title'])}\" "
                f"style=\"{self._STYLES['image']} height: 16rem;\">"
            )
        byline: List[str] = []
        if meta["author"]:
            byline.append(f"<strong>{escape(meta['author'])}</strong>")
        byline.append(time_ago(article["published_at"], self._now))
        if meta["reading_time"]:
            byline.append(escape(meta["reading_time"]))

        paragraphs = "".join(
            f"<p>{escape(p)}</p>" for p in meta["description"].split("\n\n")
        )
        tags = "".join(
            f"<span style=\"{self._STYLES['tag']}\">{escape(t)}</span>"
            for t in meta["tags"] or []
        )
        original_link = ""
        if is_web_url(article["url"]):
            original_link = (
                f"<a href=\"{escape(article['url'])}\" target=\"_blank\" "
                "rel=\"noopener noreferrer\">Read original</a>"
            )
        votes = article["votes"]

        related_html = ""
        if related:
            items = "".join(
                f"<li><a href=\"/news/{r['id']}\" style=\"{self._STYLES['title_link']}\">"
                f"{escape(r['title'])}</a> "
                f"<span style=\"{self._STYLES['meta']}\">{time_ago(r['published_at'], self._now)}</span></li>"
                for r in related
            )
            related_html = f"<section class=\"related\"><h2>Related Articles</h2><ul>{items}</ul></section>"

        content = f"""
        <a href="/" style="{self._STYLES['title_link']}">&larr; Back to news list</a>
        <article style="{self._STYLES['card']}">
            {image}
            <div style="{self._STYLES['card_body']}">
                <div>{self._render_badges(article)}</div>
                <h1>{escape(article['title'])}</h1>
                <div style="{self._STYLES['meta']}">{' &middot; '.join(byline)}</div>
                {paragraphs}
                <div>{tags}</div>
                <div style="{self._STYLES['meta']}">
                    &#128077; {votes['positive']} &middot; &#128078; {votes['negative']}
                    &middot; &#128172; {votes['comments']} &middot; &#128278; {votes['saved_count']}
                    {self._render_save_button(article, saved)}
                    {original_link}
                </div>
            </div>
        </article>
        {related_html}
        """
        return self._page(article["title"], dark_mode, content)

    def render_not_found(self, dark_mode: bool = False) -> str:
        content = f"""
        <div style="{self._STYLES['empty']}">
            <h1>Article not found</h1>
            <a href="/" style="{self._STYLES['title_link']}">&larr; Back to news list</a>
        </div>
        """
        return self._page("Article not found", dark_mode, content)
