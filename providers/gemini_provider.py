"""
Google Gemini provider — uses the google-genai SDK.

Default model is gemini-2.5-flash: fast and cheap enough to answer every
search without a cache in front of it.
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from google import genai
from google.genai import types as genai_types

from providers.base import CompletionError, CompletionProvider, decode_image

logger = logging.getLogger(__name__)


class GeminiProvider(CompletionProvider):

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        max_tokens: int = 4000,
        temperature: float = 0.7,
    ):
        self.name        = "gemini"
        self.model_id    = model
        self.max_tokens  = max_tokens
        self.temperature = temperature
        self._client     = genai.Client(api_key=api_key)

    async def complete(self, prompt: str, image_data: Optional[str] = None) -> str:
        contents: list = []
        if image_data:
            image_bytes, mime = decode_image(image_data)
            contents.append(genai_types.Part.from_bytes(data=image_bytes, mime_type=mime))
        contents.append(prompt)

        gen_config = genai_types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )

        t0 = time.monotonic()
        response = await self._client.aio.models.generate_content(
            model=self.model_id,
            contents=contents,
            config=gen_config,
        )
        latency_ms = int((time.monotonic() - t0) * 1000)

        raw = response.text or ""
        logger.info("[%s] %d chars in %dms", self.full_name, len(raw), latency_ms)
        if not raw.strip():
            raise CompletionError(f"[{self.full_name}] empty response")
        return raw
