from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from healthchat.domain.chat.service import ChatService
from healthchat.domain.chat.suggestions import starter_suggestions
from healthchat.domain.conversations.service import ConversationService
from healthchat.interfaces.http.deps.auth import get_current_user
from healthchat.interfaces.http.deps.services import get_chat_service, get_conversation_service
from healthchat.schemas.chat import ChatReply, ChatRequest, SendRequest, SendResponse

log = logging.getLogger("healthchat.chat")

router = APIRouter()

@router.post("", response_model=ChatReply)
def chat_turn(
    body: ChatRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    chat: ChatService = Depends(get_chat_service),
):
    """Stateless turn: the caller sends the thread, language and memories."""
    return chat.reply(body.messages, language=body.language, memories=body.memories)

@router.post("/send", response_model=SendResponse)
def chat_send(
    body: SendRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    conversations: ConversationService = Depends(get_conversation_service),
):
    """Persisted turn: conversation, both messages and memory capture."""
    try:
        return conversations.send(
            user["id"],
            body.content,
            conversation_id=body.conversation_id,
            language=body.language,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

@router.get("/starters", response_model=List[str])
def chat_starters():
    """Random opening prompts for an empty conversation."""
    return starter_suggestions()
