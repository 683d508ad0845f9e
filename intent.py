"""
Keyword intent classifier.

Travel is checked before service, so a query mixing both ("book a repair
service") is travel. Matching is whole-word only: "bookstore" is not "book".
"""
from __future__ import annotations

import re

from models import PRODUCT, SERVICE, TRAVEL

_TRAVEL_RE = re.compile(
    r"\b(flight|fly|airline|ticket|travel|trip|vacation|hotel|book)\b",
    re.IGNORECASE,
)
_SERVICE_RE = re.compile(
    r"\b(plumber|electrician|handyman|repair|install|service|contractor)\b",
    re.IGNORECASE,
)


def classify(query: str) -> str:
    """Return one of models.INTENTS for any query text."""
    text = query or ""
    if _TRAVEL_RE.search(text):
        return TRAVEL
    if _SERVICE_RE.search(text):
        return SERVICE
    return PRODUCT
