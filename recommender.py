"""
recommender.py — the search pipeline.

    query ──► classify ──────────────────────────────┐
      │                                              ▼
      └──► provider.complete() ──► extract ──► parse_payload ──► backfill ──► result
                 │ timeout/error      │ no JSON     │ PayloadError / no items
                 └────────────────────┴─────────────┴──────────► catalog.fallback

Nothing raised inside the model path reaches the caller: every failure is
logged and answered from the catalog instead.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from backfill import backfill
from catalog import fallback
from extractor import extract
from intent import classify
from models import SearchResult
from payload import PayloadError, parse_payload
from providers.base import CompletionProvider, build_search_prompt

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
_LOG_HEAD = 2000


async def search(
    query: str,
    image_data: Optional[str] = None,
    provider: Optional[CompletionProvider] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> SearchResult:
    """
    Produce a fully populated SearchResult for one request.

    Args:
        query:      free-text shopping query (may be empty when an image is sent).
        image_data: optional base64 image from the UI.
        provider:   the model collaborator; None means catalog-only mode.
        timeout:    seconds allowed for the model call.
    """
    intent = classify(query)

    if provider is None:
        logger.info("No provider configured — catalog answer for %r", query)
        return fallback(query)

    prompt = build_search_prompt(query, intent, has_image=bool(image_data))
    t0 = time.monotonic()
    try:
        raw = await asyncio.wait_for(provider.complete(prompt, image_data), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("[%s] No reply within %.1fs — using catalog", provider.full_name, timeout)
        return fallback(query)
    except Exception as exc:
        logger.warning("[%s] Model call failed: %s — using catalog", provider.full_name, exc)
        return fallback(query)
    logger.info(
        "[%s] Reply for %r (intent hint=%s) in %dms",
        provider.full_name, query, intent, int((time.monotonic() - t0) * 1000),
    )

    return normalise(raw, query)


def normalise(raw: str, query: str) -> SearchResult:
    """Turn raw model text into a renderable result, or the catalog answer for query."""
    candidate = extract(raw)
    if candidate is None:
        logger.warning("No JSON found in model reply: %s", (raw or "")[:_LOG_HEAD])
        return fallback(query)

    try:
        result = parse_payload(candidate)
    except PayloadError as exc:
        logger.warning("Unusable model payload (%s): %s", exc.reason, exc.candidate[:_LOG_HEAD])
        return fallback(query)

    if not result.recommendations:
        logger.warning("Model payload had no usable recommendations — using catalog")
        return fallback(query)

    result = backfill(result)
    logger.info(
        "Model result: intent=%s category=%r items=%d",
        result.intent, result.category, len(result.recommendations),
    )
    return result
