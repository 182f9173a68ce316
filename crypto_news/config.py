"""
Configuration loading for the Crypto News Reader.

Values come from config.json next to this module, overridden by
environment variables where set.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, TypedDict

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://min-api.cryptocompare.com"
DEFAULT_SAVED_IDS_KEY = "crypto_news_saved_ids_v1"


class Settings(TypedDict):
    """Resolved runtime settings."""

    api_base_url: str
    api_lang: str
    api_timeout: float
    max_articles: int
    saved_ids_path: str
    saved_ids_key: str
    gcp_project_id: Optional[str]
    host: str
    port: int


def load_config(config_filename: str = "config.json") -> Dict[str, Any]:
    """Loads configuration from a JSON file."""
    # Build absolute path relative to this module
    base_dir = os.path.dirname(os.path.abspath(__file__))
    config_path = os.path.join(base_dir, config_filename)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("Config file not found at %s. Using defaults.", config_path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Config file %s is invalid (%s). Using defaults.", config_path, e)
        return {}


def get_settings(config: Optional[Dict[str, Any]] = None) -> Settings:
    """Merges file config with environment overrides."""
    if config is None:
        config = load_config()
    api = config.get("api", {})
    saved = config.get("saved_ids", {})
    server = config.get("server", {})

    return Settings(
        api_base_url=os.environ.get(
            "NEWS_API_BASE_URL", api.get("base_url", DEFAULT_API_BASE_URL)
        ).rstrip("/"),
        api_lang=os.environ.get("NEWS_API_LANG", api.get("lang", "EN")),
        api_timeout=float(os.environ.get("NEWS_API_TIMEOUT", api.get("timeout", 15))),
        max_articles=int(api.get("max_articles", 50)),
        saved_ids_path=os.environ.get(
            "SAVED_IDS_PATH", saved.get("path", "saved_ids.json")
        ),
        saved_ids_key=saved.get("key", DEFAULT_SAVED_IDS_KEY),
        gcp_project_id=os.environ.get("GCP_PROJECT_ID") or None,
        host=os.environ.get("NEWS_READER_HOST", server.get("host", "127.0.0.1")),
        port=int(os.environ.get("NEWS_READER_PORT", server.get("port", 5173))),
    )
