# backend/healthchat/interfaces/http/deps/auth.py
from __future__ import annotations

import os
from typing import Optional, Dict, Any, Annotated

from fastapi import Header, HTTPException
from healthchat.adapters.supabase_auth import verify_supabase_token, SupabaseAuthError
from healthchat.utils.text import to_bool

# NOTE: Put *no* default inside Header(); use alias to bind "Authorization".
# The default (None) lives on the function parameter.
AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]

# Dev bypass flag (local-only). Do NOT enable in production!
DEV_BYPASS_AUTH = to_bool(os.getenv("DEV_BYPASS_AUTH"), False)


def _claims_to_user(claims: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": claims.get("sub"), "claims": claims}


def _extract_bearer(auth: Optional[str]) -> str:
    """
    Extract the bearer token from the Authorization header.
    Raises HTTP 401 on any format error.
    """
    if not auth:
        raise HTTPException(status_code=401, detail="Missing Authorization header")
    parts = auth.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Expected 'Bearer <token>'")
    return parts[1]


def get_current_user(authorization: AuthHeader = None) -> Dict[str, Any]:
    """
    Strict auth dependency. In dev, can be bypassed with DEV_BYPASS_AUTH=1.
    """
    if DEV_BYPASS_AUTH:
        return {"id": "dev-user", "claims": {"dev": True}}

    token = _extract_bearer(authorization)
    try:
        claims = verify_supabase_token(token)
    except SupabaseAuthError:
        # Keep errors terse; avoid leaking internals
        raise HTTPException(status_code=401, detail="Invalid token")
    return _claims_to_user(claims)


__all__ = [
    "AuthHeader",
    "get_current_user",
    "DEV_BYPASS_AUTH",
]
