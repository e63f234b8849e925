# backend/healthchat/interfaces/http/main.py
from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
import os
import traceback
import uuid

from healthchat.adapters.llm_client import LLMError, LLMNotConfiguredError, LLMRateLimitError
from healthchat.core.config import get_settings
from healthchat.core.events import register_lifecycle
from healthchat.domain.conversations.service import ConversationNotFound
from healthchat.domain.memory.service import MemoryValidationError
from healthchat.schemas.common import ErrorResponse

logger = logging.getLogger("healthchat")


def _error(status_code: int, error: str, message: str, **extra) -> JSONResponse:
    req_id = str(uuid.uuid4())
    body = ErrorResponse(error=error, message=message, request_id=req_id, **extra)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.APP_NAME, version="0.1.0")
    register_lifecycle(app)

    allowed_origins = [
        "http://localhost:5173",      # vite dev server
        "http://localhost:8080",
    ]
    if settings.ALLOWED_ORIGINS:
        allowed_origins.extend(o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if settings.ENV == "production" else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # simple liveness
    @app.get("/_/ping")
    def _ping():
        return {"ok": True}

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning("HTTPException %s %s", exc.status_code, exc.detail)
        return _error(exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("ValidationError %s", exc)
        return _error(422, "validation_error", "Invalid request payload", details=jsonable_encoder(exc.errors()))

    @app.exception_handler(ConversationNotFound)
    async def conversation_not_found_handler(request: Request, exc: ConversationNotFound):
        return _error(404, "not_found", "Conversation not found")

    @app.exception_handler(MemoryValidationError)
    async def memory_invalid_handler(request: Request, exc: MemoryValidationError):
        return _error(400, "invalid_memory", str(exc))

    @app.exception_handler(LLMRateLimitError)
    async def llm_rate_limit_handler(request: Request, exc: LLMRateLimitError):
        return _error(429, "rate_limited", "Rate limit exceeded. Please try again in a moment.")

    @app.exception_handler(LLMNotConfiguredError)
    async def llm_missing_handler(request: Request, exc: LLMNotConfiguredError):
        logger.error("LLM not configured: %s", exc)
        return _error(503, "llm_unavailable", str(exc))

    @app.exception_handler(LLMError)
    async def llm_error_handler(request: Request, exc: LLMError):
        return _error(502, "llm_error", str(exc))

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        req_id = str(uuid.uuid4())
        logger.error("Unhandled exception %s %s\n%s", req_id, exc, traceback.format_exc())
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "type": exc.__class__.__name__,
                "message": str(exc),
                "request_id": req_id,
            },
        )

    from healthchat.interfaces.http.routers import api
    app.include_router(api)

    return app

app = create_app()


if __name__ == "__main__":
    import uvicorn
    debug = get_settings().DEBUG
    uvicorn.run(
        "healthchat.interfaces.http.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=debug,
        log_level="debug" if debug else "info",
    )
