"""
Provider Manager — turns ProviderSettings into the one provider this process uses.

Selectors:
  gemini  → GeminiProvider     (needs GEMINI_API_KEY)
  claude  → AnthropicProvider  (needs ANTHROPIC_API_KEY)
  openai  → OpenAIProvider     (needs OPENAI_API_KEY)

No key, or an unknown selector, yields None: every search is then answered
from the built-in catalog. That is demo mode, not an error.
"""
from __future__ import annotations

import logging
from typing import Optional

from config import SUPPORTED_PROVIDERS, ProviderSettings
from providers.base import CompletionProvider

logger = logging.getLogger(__name__)


def build_provider(settings: ProviderSettings) -> Optional[CompletionProvider]:
    """Instantiate the selected provider, or return None for catalog-only mode."""
    if settings.provider not in SUPPORTED_PROVIDERS:
        logger.warning(
            "Unknown AI_PROVIDER %r (expected one of %s) — using built-in catalog",
            settings.provider, ", ".join(SUPPORTED_PROVIDERS),
        )
        return None
    if not settings.enabled:
        logger.info("No API key for %s — using built-in catalog", settings.provider)
        return None

    kwargs = dict(
        api_key=settings.api_key,
        model=settings.model,
        max_tokens=settings.max_tokens,
        temperature=settings.temperature,
    )
    if settings.provider == "gemini":
        from providers.gemini_provider import GeminiProvider
        provider: CompletionProvider = GeminiProvider(**kwargs)
    elif settings.provider == "claude":
        from providers.anthropic_provider import AnthropicProvider
        provider = AnthropicProvider(**kwargs)
    else:
        from providers.openai_provider import OpenAIProvider
        provider = OpenAIProvider(**kwargs)

    logger.info("Loaded provider: %s", provider.full_name)
    return provider
