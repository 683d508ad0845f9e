"""
Pull the candidate JSON payload out of a raw model reply.

Deliberately simple: strip markdown fences anywhere, then take everything from
the first "{" to the last "}". There is no brace balancing, so prose that
contains its own braces around the payload will widen the candidate.
"""
from __future__ import annotations

import re
from typing import Optional

# ```json, ```JSON, ```javascript, bare ``` — plus whitespace after the marker
_FENCE_RE = re.compile(r"```[A-Za-z0-9_+-]*[ \t]*")


def strip_fences(text: str) -> str:
    return _FENCE_RE.sub("", text)


def extract(raw: str) -> Optional[str]:
    """Return the first-{ to last-} substring of raw, or None if there isn't one."""
    if not raw:
        return None
    text = strip_fences(raw)
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]
