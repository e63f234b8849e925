# backend/healthchat/interfaces/http/deps/services.py
"""Service providers for routers; tests swap them via app.dependency_overrides."""
from __future__ import annotations

from functools import lru_cache

from healthchat.domain.chat.service import ChatService
from healthchat.domain.conversations.service import ConversationService
from healthchat.domain.memory.service import MemoryService


@lru_cache(maxsize=1)
def get_chat_service() -> ChatService:
    return ChatService()


@lru_cache(maxsize=1)
def get_memory_service() -> MemoryService:
    return MemoryService()


@lru_cache(maxsize=1)
def get_conversation_service() -> ConversationService:
    return ConversationService(chat=get_chat_service(), memory=get_memory_service())
