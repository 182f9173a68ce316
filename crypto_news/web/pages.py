"""HTML views: the news list and article detail pages."""

from flask import Blueprint, redirect, request

from crypto_news.models import FilterMode
from crypto_news.pipeline import related_articles, trending_currencies
from crypto_news.web.context import get_reader, get_renderer

bp = Blueprint("pages", __name__)


def _back():
    """Redirects to the referring page when it is on this host."""
    target = request.referrer or ""
    if not target.startswith(request.host_url):
        target = "/"
    return redirect(target)


@bp.get("/")
def index():
    reader = get_reader()
    if "q" in request.args:
        reader.set_query(request.args.get("q", ""))
    if "filter" in request.args:
        reader.set_filter(
            FilterMode.parse(request.args.get("filter"), reader.state.filter_mode)
        )

    visible = reader.visible()
    return get_renderer().render_list(
        reader.state, visible, trending_currencies(visible)
    )


@bp.get("/news/<article_id>")
def detail(article_id: str):
    reader = get_reader()
    renderer = get_renderer()
    dark_mode = reader.state.dark_mode
    article = None
    if article_id.isascii() and article_id.isdigit():
        article = reader.article(int(article_id))
    if article is None:
        return renderer.render_not_found(dark_mode), 404

    related = related_articles(article, reader.state.articles)
    return renderer.render_detail(
        article, related, reader.is_saved(article["id"]), dark_mode
    )


@bp.post("/refresh")
def refresh():
    get_reader().load_news()
    return redirect("/")


@bp.post("/banner/dismiss")
def dismiss_banner():
    get_reader().dismiss_error()
    return _back()


@bp.post("/saved/<int:article_id>")
def toggle_saved(article_id: int):
    get_reader().toggle_saved(article_id)
    return _back()


@bp.post("/theme")
def toggle_theme():
    get_reader().toggle_theme()
    return _back()
