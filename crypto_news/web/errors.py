"""Global HTTP error handling and JSON response helpers."""

import logging
from typing import Any

from flask import Flask, jsonify, request

from crypto_news.web.context import get_reader, get_renderer

logger = logging.getLogger(__name__)


def _wants_json() -> bool:
    return request.path.startswith("/api")


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(err: Exception):  # type: ignore[override]
        if _wants_json():
            return jsonify({"error": "not_found", "message": str(err)}), 404
        return get_renderer().render_not_found(get_reader().state.dark_mode), 404

    @app.errorhandler(500)
    def internal(err: Exception):  # type: ignore[override]
        logger.error("Unhandled error on %s: %s", request.path, err)
        if _wants_json():
            return jsonify({"error": "internal_server_error", "message": "unexpected error"}), 500
        return "Internal server error", 500


def ok(data: Any, status: int = 200):
    return jsonify({"data": data}), status
