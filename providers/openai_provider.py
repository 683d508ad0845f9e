"""
OpenAI provider — chat completions, gpt-4o-mini by default.
"""
from __future__ import annotations

import base64
import logging
import time
from typing import Optional

from openai import AsyncOpenAI

from providers.base import CompletionError, CompletionProvider, decode_image

logger = logging.getLogger(__name__)


class OpenAIProvider(CompletionProvider):

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        self.name        = "openai"
        self.model_id    = model
        self.max_tokens  = max_tokens
        self.temperature = temperature
        self._client     = AsyncOpenAI(api_key=api_key)

    async def complete(self, prompt: str, image_data: Optional[str] = None) -> str:
        if image_data:
            image_bytes, mime = decode_image(image_data)
            b64 = base64.b64encode(image_bytes).decode()
            content: str | list = [
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{mime};base64,{b64}", "detail": "high"},
                },
                {"type": "text", "text": prompt},
            ]
        else:
            content = prompt

        t0 = time.monotonic()
        response = await self._client.chat.completions.create(
            model=self.model_id,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": content}],
        )
        latency_ms = int((time.monotonic() - t0) * 1000)

        raw = ""
        if response.choices:
            raw = response.choices[0].message.content or ""
        logger.info("[%s] %d chars in %dms", self.full_name, len(raw), latency_ms)
        if not raw.strip():
            raise CompletionError(f"[{self.full_name}] empty response")
        return raw
