from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class ConversationOut(BaseModel):
    id: str
    user_id: str
    title: str
    language: str = "en"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StoredMessage(BaseModel):
    id: Optional[str] = None
    conversation_id: str
    role: str
    content: str
    created_at: Optional[datetime] = None
