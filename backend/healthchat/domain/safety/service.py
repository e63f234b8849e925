# backend/healthchat/domain/safety/service.py
"""
Emergency gate for inbound chat turns.

Public API:
- matched_keyword(text: str) -> str | None
- is_emergency(text: str) -> bool
- latest_user_message(messages) -> str
- detect_emergency(messages) -> bool
- emergency_reply() -> ChatReply

Matching is plain substring containment on the lower-cased message, so
embedded words count ("poison" inside "poisonous").
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from healthchat.schemas.chat import ChatReply, MessageLike, role_and_content

__all__ = [
    "EMERGENCY_KEYWORDS",
    "EMERGENCY_MESSAGE",
    "EMERGENCY_SUGGESTIONS",
    "matched_keyword",
    "is_emergency",
    "latest_user_message",
    "detect_emergency",
    "emergency_reply",
]

log = logging.getLogger("healthchat.safety")

# Order matters only for which keyword gets reported.
EMERGENCY_KEYWORDS: tuple[str, ...] = (
    "chest pain",
    "heart attack",
    "severe bleeding",
    "hemorrhage",
    "difficulty breathing",
    "can't breathe",
    "cannot breathe",
    "unconscious",
    "unresponsive",
    "stroke",
    "face drooping",
    "severe allergic",
    "anaphylaxis",
    "poisoning",
    "poison",
    "severe burn",
)

EMERGENCY_MESSAGE = (
    "🚨 EMERGENCY DETECTED: Based on your symptoms, please seek immediate medical attention. "
    "Call emergency services (911/108/999) right away. Do not wait. "
    "If you're experiencing a medical emergency, professional help is critical."
)

EMERGENCY_SUGGESTIONS: tuple[str, ...] = (
    "Call emergency services now",
    "Go to nearest emergency room",
    "Have someone take you to hospital",
)


def matched_keyword(text: Optional[str]) -> Optional[str]:
    """First emergency keyword contained in `text`, or None."""
    t = (text or "").lower()
    if not t:
        return None
    for kw in EMERGENCY_KEYWORDS:
        if kw in t:
            return kw
    return None


def is_emergency(text: Optional[str]) -> bool:
    return matched_keyword(text) is not None


def latest_user_message(messages: Optional[Iterable[MessageLike]]) -> str:
    """Lower-cased content of the most recent user turn ("" if there is none)."""
    latest = ""
    for m in messages or []:
        role, content = role_and_content(m)
        if role == "user":
            latest = content
    return latest.lower()


def detect_emergency(messages: Optional[Iterable[MessageLike]]) -> bool:
    kw = matched_keyword(latest_user_message(messages))
    if kw:
        log.info("emergency keyword matched: %r", kw)
    return kw is not None


def emergency_reply() -> ChatReply:
    return ChatReply(
        is_emergency=True,
        message=EMERGENCY_MESSAGE,
        suggestions=list(EMERGENCY_SUGGESTIONS),
    )
