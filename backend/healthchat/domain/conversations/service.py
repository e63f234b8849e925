# backend/healthchat/domain/conversations/service.py
"""
Conversation threads and the full send-message flow.

send() mirrors what the chat page does on every submit:
  1. create the conversation on the first message (title = first 50 chars)
  2. persist the user turn
  3. run the chat turn with the stored history and the user's memories
  4. persist the assistant turn
  5. on non-emergency turns, try to capture a new memory
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from healthchat.domain.chat.service import ChatService
from healthchat.domain.conversations.repo import ConversationRepo
from healthchat.domain.memory.service import MemoryService
from healthchat.schemas.chat import ChatMessage, SendResponse
from healthchat.utils.text import shorten

log = logging.getLogger("healthchat.conversations")

TITLE_MAX_LEN = 50


class ConversationNotFound(LookupError):
    pass


def title_from(first_message: str) -> str:
    return shorten(first_message or "", TITLE_MAX_LEN, "...")


class ConversationService:
    def __init__(
        self,
        repo: Optional[ConversationRepo] = None,
        chat: Optional[ChatService] = None,
        memory: Optional[MemoryService] = None,
    ):
        self.repo = repo or ConversationRepo()
        self.chat = chat or ChatService()
        self.memory = memory or MemoryService()

    def create(self, user_id: str, first_message: str, language: str = "en") -> Dict[str, Any]:
        row = self.repo.insert(user_id, title_from(first_message), language)
        log.info("conversation %s created for %s", row.get("id"), user_id)
        return row

    def list(self, user_id: str) -> List[Dict[str, Any]]:
        return self.repo.list_for_user(user_id)

    def get(self, user_id: str, conversation_id: str) -> Dict[str, Any]:
        row = self.repo.get(user_id, conversation_id)
        if row is None:
            raise ConversationNotFound(conversation_id)
        return row

    def delete(self, user_id: str, conversation_id: str) -> None:
        if not self.repo.delete(user_id, conversation_id):
            raise ConversationNotFound(conversation_id)

    def messages(self, user_id: str, conversation_id: str) -> List[Dict[str, Any]]:
        self.get(user_id, conversation_id)
        return self.repo.messages(conversation_id)

    def add_message(self, conversation_id: str, role: str, content: str) -> Dict[str, Any]:
        row = self.repo.insert_message(conversation_id, role, content)
        self.repo.touch(conversation_id)
        return row

    def _load_memories(self, user_id: str) -> Optional[List[str]]:
        try:
            return self.memory.contents(user_id)
        except Exception as e:
            log.warning("could not load memories for %s: %s", user_id, e)
            return None

    def send(
        self,
        user_id: str,
        content: str,
        conversation_id: Optional[str] = None,
        language: str = "en",
    ) -> SendResponse:
        text = (content or "").strip()
        if not text:
            raise ValueError("Message content is required")

        if conversation_id:
            conv_id = str(self.get(user_id, conversation_id)["id"])
            history = self.repo.messages(conv_id)
        else:
            conv_id = str(self.create(user_id, text, language)["id"])
            history = []

        turns = [ChatMessage(role=m["role"], content=m.get("content") or "") for m in history]
        turns.append(ChatMessage(role="user", content=text))
        self.add_message(conv_id, "user", text)

        memories = self._load_memories(user_id)
        reply = self.chat.reply(turns, language=language, memories=memories or [])
        self.add_message(conv_id, "assistant", reply.message)

        captured = None
        if not reply.is_emergency:
            captured = self.memory.capture(user_id, turns, existing=memories)

        return SendResponse(conversation_id=conv_id, reply=reply, memory=captured)
