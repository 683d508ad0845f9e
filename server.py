"""
server.py — HTTP boundary for the search pipeline.

Runs as an aiohttp web server. The provider is resolved once at start-up and
stored on the app; handlers never read configuration themselves.

Endpoints:
  POST /api/search    → SearchResult JSON (plus affiliateUrl/commission per item)
  GET  /api/networks  → affiliate registry for commission display
  GET  /health        → plain-text health check (for uptime monitors)

Errors:
  malformed request   → 400 {"error": "Invalid request"}
  anything unexpected → 500 {"error": "Failed to process request"}
"""
from __future__ import annotations

import json
import logging
from typing import Optional

from aiohttp import web

import affiliate
import recommender
from models import SearchResult
from providers.base import CompletionProvider, decode_image

logger = logging.getLogger(__name__)

PROVIDER_KEY = web.AppKey("provider", object)
TIMEOUT_KEY  = web.AppKey("model_timeout", float)


class BadRequest(ValueError):
    """Inbound body is not a usable search request."""


# ── Rendering ─────────────────────────────────────────────────────────────────

def render_result(result: SearchResult) -> dict:
    """Wire shape with outbound links resolved at render time."""
    body = result.to_dict()
    for item, data in zip(result.recommendations, body["recommendations"]):
        data["affiliateUrl"] = affiliate.build_link(item)
        data["commission"]   = affiliate.commission_for(item.affiliate_network)
    return body


def parse_request(body: object) -> tuple[str, Optional[str]]:
    """Validate the inbound JSON. Returns (query, image_data)."""
    if not isinstance(body, dict):
        raise BadRequest("body must be a JSON object")

    query = body.get("query")
    if not isinstance(query, str):
        raise BadRequest("query must be a string")

    image_data = body.get("imageData")
    if image_data in (None, ""):
        image_data = None
    elif not isinstance(image_data, str):
        raise BadRequest("imageData must be a base64 string")
    else:
        try:
            decode_image(image_data)
        except ValueError as exc:
            raise BadRequest(str(exc)) from exc

    if not query.strip() and image_data is None:
        raise BadRequest("query is empty and no image was sent")
    return query.strip(), image_data


# ── Request handlers ───────────────────────────────────────────────────────────

async def handle_search(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.info("Rejected search: body is not JSON")
        return web.json_response({"error": "Invalid request"}, status=400)

    try:
        query, image_data = parse_request(body)
    except BadRequest as exc:
        logger.info("Rejected search: %s", exc)
        return web.json_response({"error": "Invalid request"}, status=400)

    try:
        result = await recommender.search(
            query,
            image_data,
            provider=request.app[PROVIDER_KEY],
            timeout=request.app[TIMEOUT_KEY],
        )
        return web.json_response(render_result(result))
    except Exception as exc:
        logger.error("Search failed for %r: %s", query, exc, exc_info=True)
        return web.json_response({"error": "Failed to process request"}, status=500)


async def handle_networks(request: web.Request) -> web.Response:
    return web.json_response([
        {"key": n.key, "name": n.name, "commission": n.commission}
        for n in affiliate.REGISTRY.values()
    ])


async def handle_health(request: web.Request) -> web.Response:
    """Health check — returns 200 OK. Use with uptime monitors."""
    provider: Optional[CompletionProvider] = request.app[PROVIDER_KEY]
    name = provider.full_name if provider else "catalog"
    return web.Response(text=f"OK — provider: {name}", content_type="text/plain")


# ── App factory ────────────────────────────────────────────────────────────────

def build_web_app(
    provider: Optional[CompletionProvider] = None,
    model_timeout: float = recommender.DEFAULT_TIMEOUT,
) -> web.Application:
    app = web.Application()
    app[PROVIDER_KEY] = provider
    app[TIMEOUT_KEY]  = model_timeout
    app.router.add_post("/api/search",  handle_search)
    app.router.add_get("/api/networks", handle_networks)
    app.router.add_get("/health",       handle_health)
    return app


async def start_server(
    provider: Optional[CompletionProvider],
    host: str,
    port: int,
    model_timeout: float = recommender.DEFAULT_TIMEOUT,
) -> web.AppRunner:
    """Start the web server. Returns runner so caller can shut it down cleanly."""
    app    = build_web_app(provider, model_timeout)
    runner = web.AppRunner(app, access_log=logger)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info(
        "Search API listening on %s:%d  (provider: %s)",
        host, port, provider.full_name if provider else "built-in catalog",
    )
    return runner
