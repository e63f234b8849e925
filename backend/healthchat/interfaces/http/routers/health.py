from __future__ import annotations
from fastapi import APIRouter

from healthchat.adapters.llm_client import get_llm
from healthchat.adapters.supabase_client import supa_ping
from healthchat.schemas.common import HealthResponse

router = APIRouter()

@router.get("/healthz", response_model=HealthResponse)
def healthz():
    ok_db = supa_ping(readonly=True)
    ok_llm = get_llm().configured
    return HealthResponse(ok=ok_db and ok_llm, supabase=ok_db, llm=ok_llm)
