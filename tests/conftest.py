"""
Shared pytest fixtures.

FakeProvider stands in for a real model: it returns scripted text (or raises,
or hangs) so the whole pipeline can be exercised without network access.
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional

import pytest

# ── Make the project root importable without installing the package ────────────
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from providers.base import CompletionProvider  # noqa: E402


class FakeProvider(CompletionProvider):
    def __init__(self, reply: str = "", error: Optional[Exception] = None, delay: float = 0.0):
        self.name = "fake"
        self.model_id = "scripted"
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls: list[tuple[str, Optional[str]]] = []

    async def complete(self, prompt: str, image_data: Optional[str] = None) -> str:
        self.calls.append((prompt, image_data))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_provider():
    """Factory: fake_provider(reply=..., error=..., delay=...)."""
    return FakeProvider


# 1×1 transparent PNG
PNG_B64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_b64() -> str:
    return PNG_B64
