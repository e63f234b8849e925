from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException

from healthchat.domain.memory.extractor import extract_memory
from healthchat.domain.memory.service import MemoryService
from healthchat.interfaces.http.deps.auth import get_current_user
from healthchat.interfaces.http.deps.services import get_memory_service
from healthchat.schemas.common import EmptyResponse
from healthchat.schemas.memory import AddMemoryIn, ExtractIn, MemoryExtraction, MemoryOut

router = APIRouter()

@router.get("", response_model=List[MemoryOut])
def mem_list(
    user: Dict[str, Any] = Depends(get_current_user),
    svc: MemoryService = Depends(get_memory_service),
):
    return svc.list(user["id"])

@router.post("", response_model=MemoryOut, status_code=201)
def mem_add(
    body: AddMemoryIn,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: MemoryService = Depends(get_memory_service),
):
    return svc.add(user["id"], body.content, body.category)

@router.delete("/{memory_id}", response_model=EmptyResponse)
def mem_delete(
    memory_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    svc: MemoryService = Depends(get_memory_service),
):
    if not svc.delete(user["id"], memory_id):
        raise HTTPException(status_code=404, detail="Memory not found")
    return EmptyResponse()

@router.post("/extract", response_model=Optional[MemoryExtraction])
def mem_extract(body: ExtractIn, user: Dict[str, Any] = Depends(get_current_user)):
    """Dry run of the extractor; nothing is stored."""
    return extract_memory(body.messages, body.existing_memories)
