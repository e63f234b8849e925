# backend/healthchat/domain/chat/service.py
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from healthchat.adapters.llm_client import LLMClient, get_llm
from healthchat.domain.chat.prompt import build_system_prompt, to_llm_messages
from healthchat.domain.chat.suggestions import generate_suggestions
from healthchat.domain.safety.service import detect_emergency, emergency_reply, latest_user_message
from healthchat.schemas.chat import ChatReply, MessageLike

log = logging.getLogger("healthchat.chat")


class ChatService:
    """One chat turn: emergency gate first, then the model."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self._llm = llm

    @property
    def llm(self) -> LLMClient:
        if self._llm is None:
            self._llm = get_llm()
        return self._llm

    def reply(
        self,
        messages: Sequence[MessageLike],
        language: str = "en",
        memories: Optional[Iterable[str]] = None,
    ) -> ChatReply:
        if not messages:
            raise ValueError("Messages array is required")

        log.info("chat turn: %d messages, language=%s", len(messages), language)

        if detect_emergency(messages):
            return emergency_reply()

        system_prompt = build_system_prompt(language, memories)
        text = self.llm.complete(system_prompt, to_llm_messages(messages))

        return ChatReply(
            is_emergency=False,
            message=text,
            suggestions=generate_suggestions(latest_user_message(messages), text),
        )
