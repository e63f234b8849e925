from __future__ import annotations
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

MemoryCategory = Literal[
    "Allergies",
    "Medical Conditions",
    "Medications",
    "Medical Info",
    "General Health",
]

class MemoryOut(BaseModel):
    id: str
    user_id: str
    content: str
    category: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class AddMemoryIn(BaseModel):
    content: str
    category: Optional[str] = None

class MemoryExtraction(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    should_save: bool = Field(True, alias="shouldSave")
    memory: str
    category: MemoryCategory = "General Health"
    confidence: float = Field(..., gt=0.0, le=1.0)

class ExtractMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str = ""

class ExtractIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ExtractMessage] = Field(default_factory=list)
    existing_memories: List[str] = Field(default_factory=list, alias="existingMemories")
