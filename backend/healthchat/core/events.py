from __future__ import annotations

import logging
from typing import Literal, cast
from fastapi import FastAPI

from healthchat.core.config import get_settings
from healthchat.core.logging import setup_logging
from healthchat.adapters.llm_client import get_llm
from healthchat.adapters.supabase_client import supa_ping

log = logging.getLogger("healthchat.core")


def _startup_health() -> None:
    """
    Best-effort “are the basics alive” checks.
    Never raises; logs warnings so the app still boots in dev.
    """
    if not get_llm().configured:
        log.warning("LLM_API_KEY not set (chat turns will return 503)")

    try:
        if not supa_ping(readonly=True):
            log.warning("supabase ping failed (readonly)")
    except Exception as e:
        log.warning("supabase ping error: %s", e)


def register_lifecycle(app: FastAPI) -> None:
    """
    Registers startup/shutdown hooks on the FastAPI app.
    """
    settings = get_settings()
    fmt: Literal["console", "json"] = cast(Literal["console", "json"], settings.LOG_FORMAT)
    setup_logging(level=logging.DEBUG if settings.DEBUG else logging.INFO, fmt=fmt)

    @app.on_event("startup")
    async def _on_startup() -> None:  # noqa: D401
        log.info("starting %s (env=%s)", settings.APP_NAME, settings.ENV)
        _startup_health()

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:  # noqa: D401
        log.info("shutting down %s", settings.APP_NAME)
