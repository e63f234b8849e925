# backend/healthchat/domain/safety/__init__.py
from .service import (
    EMERGENCY_KEYWORDS,
    EMERGENCY_MESSAGE,
    EMERGENCY_SUGGESTIONS,
    detect_emergency,
    emergency_reply,
    is_emergency,
    latest_user_message,
    matched_keyword,
)
