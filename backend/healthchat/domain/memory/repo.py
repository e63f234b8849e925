# backend/healthchat/domain/memory/repo.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from supabase import Client

from healthchat.adapters.supabase_client import supa

T_MEMORIES = "memories"


class MemoryRepo:
    """Rows of the `memories` table, always scoped to one user."""

    def __init__(self, client: Optional[Client] = None, table: str = T_MEMORIES):
        self._client = client
        self.table = table

    def _tbl(self):
        client = self._client if self._client is not None else supa()
        return client.table(self.table)

    # ---- queries ----
    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        res = (
            self._tbl()
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .execute()
        )
        return list(getattr(res, "data", []) or [])

    def contents_for_user(self, user_id: str) -> List[str]:
        res = self._tbl().select("content").eq("user_id", user_id).execute()
        rows = getattr(res, "data", []) or []
        return [r["content"] for r in rows if r.get("content")]

    # ---- mutations ----
    def insert(self, user_id: str, content: str, category: Optional[str]) -> Dict[str, Any]:
        res = self._tbl().insert({"user_id": user_id, "content": content, "category": category}).execute()
        rows = getattr(res, "data", []) or []
        return rows[0] if rows else {"user_id": user_id, "content": content, "category": category}

    def delete(self, user_id: str, memory_id: str) -> bool:
        res = self._tbl().delete().eq("id", memory_id).eq("user_id", user_id).execute()
        return bool(getattr(res, "data", None))
