"""JSON endpoints mirroring the HTML views."""

from typing import Any, Dict

from flask import Blueprint, abort, request

from crypto_news.models import Article, FilterMode
from crypto_news.pipeline import related_articles, select
from crypto_news.web.context import get_reader
from crypto_news.web.errors import ok

bp = Blueprint("api", __name__)


def article_to_json(article: Article) -> Dict[str, Any]:
    data: Dict[str, Any] = dict(article)
    data["published_at"] = article["published_at"].isoformat()
    return data


@bp.get("/news")
def list_news():
    """Visible articles; query args override the current view without storing it."""
    state = get_reader().state
    mode = FilterMode.parse(request.args.get("filter"), state.filter_mode)
    query = request.args.get("q", state.query)
    items = select(state.articles, mode, query, state.saved_ids)
    return ok(
        {
            "filter": mode.value,
            "query": query,
            "loading": state.loading,
            "error": state.error,
            "items": [article_to_json(a) for a in items],
        }
    )


@bp.get("/news/<int:article_id>")
def get_news(article_id: int):
    reader = get_reader()
    article = reader.article(article_id)
    if article is None:
        abort(404, description=f"Article {article_id} not found")
    related = related_articles(article, reader.state.articles)
    return ok(
        {
            "article": article_to_json(article),
            "saved": reader.is_saved(article_id),
            "related": [article_to_json(a) for a in related],
        }
    )


@bp.get("/saved")
def list_saved():
    return ok(list(get_reader().state.saved_ids))
