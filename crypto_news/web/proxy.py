"""Same-origin proxy that forwards GET requests to the upstream news API."""

import logging

import requests
from flask import Blueprint, Response, current_app, request

logger = logging.getLogger(__name__)

bp = Blueprint("proxy", __name__)

# Hop-by-hop and encoding headers that must not be copied back
_EXCLUDED_HEADERS = {
    "content-encoding",
    "content-length",
    "transfer-encoding",
    "connection",
}


@bp.get("/<path:subpath>")
def forward(subpath: str):
    settings = current_app.config["NEWS_SETTINGS"]
    upstream = f"{settings['api_base_url']}/{subpath}"
    try:
        resp = requests.get(
            upstream,
            params=request.args.to_dict(flat=False),
            timeout=settings["api_timeout"],
        )
    except requests.RequestException as req_err:
        logger.error("Proxy error fetching %s: %s", upstream, req_err)
        return Response(f"Upstream unavailable: {req_err}", status=502)

    headers = [
        (name, value)
        for name, value in resp.headers.items()
        if name.lower() not in _EXCLUDED_HEADERS
    ]
    return Response(resp.content, status=resp.status_code, headers=headers)
