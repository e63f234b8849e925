from __future__ import annotations
from datetime import datetime
from typing import Any, List, Literal, Mapping, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field

from healthchat.schemas.memory import MemoryExtraction

Role = Literal["user", "assistant", "system"]

class ChatMessage(BaseModel):
    role: Role
    content: str = ""
    timestamp: Optional[datetime] = None

MessageLike = Union[BaseModel, Mapping[str, Any]]

def role_and_content(m: MessageLike) -> Tuple[str, str]:
    """Accepts ChatMessage-like models and plain {"role", "content"} dicts."""
    if isinstance(m, Mapping):
        return str(m.get("role") or ""), str(m.get("content") or "")
    return str(getattr(m, "role", "") or ""), str(getattr(m, "content", "") or "")

class ChatRequest(BaseModel):
    """Stateless turn: the client supplies the whole thread."""
    messages: List[ChatMessage] = Field(..., min_length=1)
    language: str = "en"
    memories: List[str] = Field(default_factory=list)

class ChatReply(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_emergency: bool = Field(False, alias="isEmergency")
    message: str = ""
    suggestions: List[str] = Field(default_factory=list)

class SendRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str = Field(..., min_length=1)
    conversation_id: Optional[str] = Field(None, alias="conversationId")
    language: str = "en"

class SendResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    conversation_id: str = Field(..., alias="conversationId")
    reply: ChatReply
    memory: Optional[MemoryExtraction] = None
