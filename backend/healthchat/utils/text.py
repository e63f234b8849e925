from __future__ import annotations

import re

__all__ = [
    "to_bool",
    "squash_ws",
    "shorten",
]

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}

_WS_RE = re.compile(r"\s+")

def to_bool(s: object, default: bool = False) -> bool:
    """Parse common truthy/falsey strings."""
    if isinstance(s, bool):
        return s
    if s is None:
        return default
    v = str(s).strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return default

def squash_ws(s: str) -> str:
    """Collapse whitespace to single spaces; trim ends."""
    return _WS_RE.sub(" ", (s or "")).strip()

def shorten(text: str, max_len: int, ellipsis: str = "...") -> str:
    """Hard cut at max_len characters, ellipsis appended only when cut."""
    text = text or ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + ellipsis
