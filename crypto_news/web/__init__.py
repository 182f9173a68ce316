"""Application factory and blueprint registration."""

from typing import Optional

from flask import Flask

from crypto_news.config import Settings, get_settings
from crypto_news.reader import NewsReader
from crypto_news.services.page_service import PageRenderer
from crypto_news.services.saved_store import make_saved_store
from crypto_news.sources.cryptocompare import CryptoCompareSource
from crypto_news.web.api import bp as api_bp
from crypto_news.web.errors import register_error_handlers
from crypto_news.web.pages import bp as pages_bp
from crypto_news.web.proxy import bp as proxy_bp


def build_reader(settings: Settings) -> NewsReader:
    """Wires the live source and saved-id store from settings."""
    source = CryptoCompareSource(
        settings["api_base_url"],
        lang=settings["api_lang"],
        timeout=settings["api_timeout"],
        max_articles=settings["max_articles"],
    )
    return NewsReader(source, make_saved_store(settings))


def create_app(
    reader: Optional[NewsReader] = None,
    settings: Optional[Settings] = None,
    renderer: Optional[PageRenderer] = None,
) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    settings = settings or get_settings()
    app.config["NEWS_SETTINGS"] = settings

    app.extensions["news_reader"] = reader or build_reader(settings)
    app.extensions["page_renderer"] = renderer or PageRenderer()

    # Register blueprints
    app.register_blueprint(pages_bp)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(proxy_bp, url_prefix="/cc")

    # Global error handlers
    register_error_handlers(app)
    return app