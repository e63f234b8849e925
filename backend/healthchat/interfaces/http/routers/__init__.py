from __future__ import annotations
from fastapi import APIRouter

from . import chat, conversations, health, memory, safety

api = APIRouter()
api.include_router(health.router,        prefix="/health", tags=["health"])
api.include_router(chat.router,          prefix="/chat", tags=["chat"])
api.include_router(conversations.router, prefix="/conversations", tags=["conversations"])
api.include_router(memory.router,        prefix="/memory", tags=["memory"])
api.include_router(safety.router,        prefix="/safety", tags=["safety"])
