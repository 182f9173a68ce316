"""
Crypto News Reader
This script loads configuration, fetches the latest cryptocurrency news
(falling back to sample articles) and serves the reader over HTTP.
"""

import logging

from crypto_news.config import get_settings
from crypto_news.web import build_reader, create_app


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main():
    """Main execution entry point."""
    settings = get_settings()
    reader = build_reader(settings)

    # Initial load; later fetches happen only on explicit retry
    state = reader.load_news()
    if state.error:
        logger.warning(state.error)

    app = create_app(reader=reader, settings=settings)
    logger.info("Serving on http://%s:%d", settings["host"], settings["port"])
    app.run(host=settings["host"], port=settings["port"])


if __name__ == "__main__":
    main()
