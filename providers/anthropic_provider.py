"""
Anthropic Claude provider.

Images go in as a base64 content block ahead of the text prompt, so the
model identifies the product before reading the instructions.
"""
from __future__ import annotations

import base64
import logging
import time
from typing import Optional

import anthropic

from providers.base import CompletionError, CompletionProvider, decode_image

logger = logging.getLogger(__name__)


class AnthropicProvider(CompletionProvider):

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-20250514",
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        self.name        = "claude"
        self.model_id    = model
        self.max_tokens  = max_tokens
        self.temperature = temperature
        self._client     = anthropic.AsyncAnthropic(api_key=api_key)

    async def complete(self, prompt: str, image_data: Optional[str] = None) -> str:
        content: list[dict] = []
        if image_data:
            image_bytes, media_type = decode_image(image_data)
            content.append({
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": media_type,
                    # re-encode so data: URIs from the UI arrive as bare base64
                    "data": base64.b64encode(image_bytes).decode(),
                },
            })
        content.append({"type": "text", "text": prompt})

        t0 = time.monotonic()
        message = await self._client.messages.create(
            model=self.model_id,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": content}],
        )
        latency_ms = int((time.monotonic() - t0) * 1000)

        raw = next((block.text for block in message.content if block.type == "text"), "")
        logger.info(
            "[%s] %d chars in %dms (in=%d out=%d tokens)",
            self.full_name, len(raw), latency_ms,
            message.usage.input_tokens, message.usage.output_tokens,
        )
        if not raw.strip():
            raise CompletionError(f"[{self.full_name}] no text block in response")
        return raw
