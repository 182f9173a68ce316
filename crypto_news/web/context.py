"""Accessors for per-app objects stored on the Flask app."""

from flask import current_app

from crypto_news.reader import NewsReader
from crypto_news.services.page_service import PageRenderer


def get_reader() -> NewsReader:
    return current_app.extensions["news_reader"]


def get_renderer() -> PageRenderer:
    return current_app.extensions["page_renderer"]
