from __future__ import annotations
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field

class HealthResponse(BaseModel):
    ok: bool = True
    supabase: bool = False
    llm: bool = False
    version: Optional[str] = None

class ErrorResponse(BaseModel):
    error: str
    message: str
    request_id: Optional[str] = None
    details: Optional[Any] = None

class EmptyResponse(BaseModel):
    ok: bool = True

class ClassifyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_emergency: bool = Field(False, alias="isEmergency")
    keyword: Optional[str] = None
