# backend/healthchat/domain/conversations/repo.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from supabase import Client

from healthchat.adapters.supabase_client import supa
from healthchat.utils.time import utc_iso

T_CONVERSATIONS = "conversations"
T_MESSAGES = "messages"


class ConversationRepo:
    def __init__(self, client: Optional[Client] = None):
        self._client = client

    def _tbl(self, name: str):
        client = self._client if self._client is not None else supa()
        return client.table(name)

    # ---- conversations ----
    def insert(self, user_id: str, title: str, language: str) -> Dict[str, Any]:
        res = self._tbl(T_CONVERSATIONS).insert(
            {"user_id": user_id, "title": title, "language": language}
        ).execute()
        rows = getattr(res, "data", []) or []
        if not rows:
            raise RuntimeError("conversation insert returned no row")
        return rows[0]

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        res = (
            self._tbl(T_CONVERSATIONS)
            .select("*")
            .eq("user_id", user_id)
            .order("updated_at", desc=True)
            .execute()
        )
        return list(getattr(res, "data", []) or [])

    def get(self, user_id: str, conversation_id: str) -> Optional[Dict[str, Any]]:
        res = (
            self._tbl(T_CONVERSATIONS)
            .select("*")
            .eq("id", conversation_id)
            .eq("user_id", user_id)
            .limit(1)
            .execute()
        )
        rows = getattr(res, "data", []) or []
        return rows[0] if rows else None

    def delete(self, user_id: str, conversation_id: str) -> bool:
        # messages go with it via ON DELETE CASCADE
        res = self._tbl(T_CONVERSATIONS).delete().eq("id", conversation_id).eq("user_id", user_id).execute()
        return bool(getattr(res, "data", None))

    def touch(self, conversation_id: str) -> None:
        self._tbl(T_CONVERSATIONS).update({"updated_at": utc_iso()}).eq("id", conversation_id).execute()

    # ---- messages ----
    def messages(self, conversation_id: str) -> List[Dict[str, Any]]:
        res = (
            self._tbl(T_MESSAGES)
            .select("*")
            .eq("conversation_id", conversation_id)
            .order("created_at", desc=False)
            .execute()
        )
        return list(getattr(res, "data", []) or [])

    def insert_message(self, conversation_id: str, role: str, content: str) -> Dict[str, Any]:
        res = self._tbl(T_MESSAGES).insert(
            {"conversation_id": conversation_id, "role": role, "content": content}
        ).execute()
        rows = getattr(res, "data", []) or []
        return rows[0] if rows else {"conversation_id": conversation_id, "role": role, "content": content}
