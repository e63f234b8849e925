from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from healthchat.domain.conversations.service import ConversationService
from healthchat.interfaces.http.deps.auth import get_current_user
from healthchat.interfaces.http.deps.services import get_conversation_service
from healthchat.schemas.common import EmptyResponse
from healthchat.schemas.conversation import ConversationOut, StoredMessage

router = APIRouter()

@router.get("", response_model=List[ConversationOut])
def conv_list(
    user: Dict[str, Any] = Depends(get_current_user),
    svc: ConversationService = Depends(get_conversation_service),
):
    return svc.list(user["id"])

@router.get("/{conversation_id}", response_model=ConversationOut)
def conv_get(
    conversation_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: ConversationService = Depends(get_conversation_service),
):
    return svc.get(user["id"], conversation_id)

@router.get("/{conversation_id}/messages", response_model=List[StoredMessage])
def conv_messages(
    conversation_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: ConversationService = Depends(get_conversation_service),
):
    return svc.messages(user["id"], conversation_id)

@router.delete("/{conversation_id}", response_model=EmptyResponse)
def conv_delete(
    conversation_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: ConversationService = Depends(get_conversation_service),
):
    svc.delete(user["id"], conversation_id)
    return EmptyResponse()
