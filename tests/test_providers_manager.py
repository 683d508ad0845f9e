"""
Tests for providers/manager.py and the concrete providers.

Covers:
  - build_provider(): selector → provider class, no key / unknown selector → None
  - each provider's complete(): request shape, image handling, empty replies
SDK clients are replaced with mocks — no network.
"""
from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from config import ProviderSettings
from providers.base import CompletionError
from providers.manager import build_provider


def settings(provider: str = "gemini", api_key="key-123", model: str = "m-1") -> ProviderSettings:
    return ProviderSettings(provider=provider, api_key=api_key, model=model,
                            timeout=10, max_tokens=1000, temperature=0.2)


# ── build_provider ────────────────────────────────────────────────────────────

class TestBuildProvider:
    def test_no_key_means_catalog_mode(self):
        assert build_provider(settings(api_key=None)) is None

    def test_empty_key_means_catalog_mode(self):
        assert build_provider(settings(api_key="")) is None

    def test_unknown_selector(self):
        assert build_provider(settings(provider="mistral")) is None

    @pytest.mark.parametrize("selector, target", [
        ("gemini", "providers.gemini_provider.GeminiProvider"),
        ("claude", "providers.anthropic_provider.AnthropicProvider"),
        ("openai", "providers.openai_provider.OpenAIProvider"),
    ])
    def test_selector_picks_class(self, selector, target):
        fake = MagicMock(full_name=f"{selector}/m-1")
        with patch(target, return_value=fake) as cls:
            provider = build_provider(settings(provider=selector))
        assert provider is fake
        cls.assert_called_once_with(api_key="key-123", model="m-1", max_tokens=1000, temperature=0.2)


# ── Gemini ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestGeminiProvider:
    def make(self, text):
        from providers.gemini_provider import GeminiProvider
        with patch("providers.gemini_provider.genai.Client"):
            provider = GeminiProvider("key", "gemini-2.5-flash")
        generate = AsyncMock(return_value=SimpleNamespace(text=text))
        provider._client = MagicMock()
        provider._client.aio.models.generate_content = generate
        return provider, generate

    async def test_returns_raw_text(self):
        provider, generate = self.make('{"intent": "product"}')
        assert await provider.complete("prompt") == '{"intent": "product"}'
        kwargs = generate.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == ["prompt"]

    async def test_image_part_first(self, png_b64):
        provider, generate = self.make("ok {}")
        await provider.complete("prompt", png_b64)
        contents = generate.call_args.kwargs["contents"]
        assert len(contents) == 2
        assert contents[-1] == "prompt"

    async def test_empty_reply_raises(self):
        provider, _ = self.make(None)
        with pytest.raises(CompletionError):
            await provider.complete("prompt")


# ── Anthropic ─────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestAnthropicProvider:
    def make(self, blocks):
        from providers.anthropic_provider import AnthropicProvider
        provider = AnthropicProvider("key", "claude-test")
        message = SimpleNamespace(
            content=blocks,
            usage=SimpleNamespace(input_tokens=10, output_tokens=20),
        )
        create = AsyncMock(return_value=message)
        provider._client = MagicMock()
        provider._client.messages.create = create
        return provider, create

    async def test_text_only_request(self):
        provider, create = self.make([SimpleNamespace(type="text", text="{}")])
        assert await provider.complete("prompt") == "{}"
        content = create.call_args.kwargs["messages"][0]["content"]
        assert content == [{"type": "text", "text": "prompt"}]

    async def test_image_block_before_text(self, png_b64):
        provider, create = self.make([SimpleNamespace(type="text", text="{}")])
        await provider.complete("prompt", f"data:image/png;base64,{png_b64}")
        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"
        assert content[0]["source"]["media_type"] == "image/png"
        assert content[0]["source"]["data"] == png_b64
        assert content[1]["type"] == "text"

    async def test_no_text_block_raises(self):
        provider, _ = self.make([SimpleNamespace(type="tool_use", text=None)])
        with pytest.raises(CompletionError):
            await provider.complete("prompt")


# ── OpenAI ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
class TestOpenAIProvider:
    def make(self, content):
        from providers.openai_provider import OpenAIProvider
        provider = OpenAIProvider("key", "gpt-test")
        response = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        )
        create = AsyncMock(return_value=response)
        provider._client = MagicMock()
        provider._client.chat.completions.create = create
        return provider, create

    async def test_plain_prompt(self):
        provider, create = self.make("{}")
        assert await provider.complete("prompt") == "{}"
        assert create.call_args.kwargs["messages"] == [{"role": "user", "content": "prompt"}]

    async def test_image_as_data_uri(self, png_b64):
        provider, create = self.make("{}")
        await provider.complete("prompt", png_b64)
        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["image_url"]["url"].startswith("data:image/png;base64,")
        assert content[1] == {"type": "text", "text": "prompt"}

    async def test_empty_reply_raises(self):
        provider, _ = self.make("")
        with pytest.raises(CompletionError):
            await provider.complete("prompt")
