"""
Central configuration — reads from .env file.

Everything here is resolved once at process start. The pipeline never reads
the environment itself: main.py calls load_provider_settings() and passes the
resulting ProviderSettings down explicitly.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

# ── Generative model providers ────────────────────────────────────────────────
# Which vendor answers search prompts:
#   gemini  → Google Gemini (default)
#   claude  → Anthropic Claude
#   openai  → OpenAI chat completions
# If the selected vendor has no key, every search is answered from the
# built-in catalog instead (demo mode).
AI_PROVIDER: str = os.getenv("AI_PROVIDER", "gemini").strip().lower()

GEMINI_API_KEY: str | None    = os.getenv("GEMINI_API_KEY")
ANTHROPIC_API_KEY: str | None = os.getenv("ANTHROPIC_API_KEY")
OPENAI_API_KEY: str | None    = os.getenv("OPENAI_API_KEY")

GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
CLAUDE_MODEL: str = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-20250514")
OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Hard ceiling on a single model call; on expiry the catalog answers instead
MODEL_TIMEOUT_SECONDS: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "30"))
MODEL_MAX_TOKENS: int        = int(os.getenv("MODEL_MAX_TOKENS", "4000"))
MODEL_TEMPERATURE: float     = float(os.getenv("MODEL_TEMPERATURE", "0.7"))

# ── Affiliate ─────────────────────────────────────────────────────────────────
# Amazon Associates tracking tag appended to every marketplace link
AMAZON_ASSOCIATE_TAG: str = os.getenv("AMAZON_ASSOCIATE_TAG", "").strip() or "YOUR_AMAZON_ID"

# ── HTTP server ───────────────────────────────────────────────────────────────
HOST: str      = os.getenv("HOST", "0.0.0.0")
PORT: int      = int(os.getenv("PORT", "8080"))
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


SUPPORTED_PROVIDERS = ("gemini", "claude", "openai")


@dataclass(frozen=True)
class ProviderSettings:
    """Snapshot of everything the model-call path needs."""
    provider: str
    api_key: Optional[str]
    model: str
    timeout: float = 30.0
    max_tokens: int = 4000
    temperature: float = 0.7

    @property
    def enabled(self) -> bool:
        """True when a model call should be attempted at all."""
        return self.provider in SUPPORTED_PROVIDERS and bool(self.api_key)


def load_provider_settings() -> ProviderSettings:
    """Resolve the provider selector and its credential from this module's values."""
    credentials = {
        "gemini": (GEMINI_API_KEY, GEMINI_MODEL),
        "claude": (ANTHROPIC_API_KEY, CLAUDE_MODEL),
        "openai": (OPENAI_API_KEY, OPENAI_MODEL),
    }
    api_key, model = credentials.get(AI_PROVIDER, (None, ""))
    return ProviderSettings(
        provider=AI_PROVIDER,
        api_key=api_key,
        model=model,
        timeout=MODEL_TIMEOUT_SECONDS,
        max_tokens=MODEL_MAX_TOKENS,
        temperature=MODEL_TEMPERATURE,
    )
