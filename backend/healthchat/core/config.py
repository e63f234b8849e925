from __future__ import annotations

import os
from functools import lru_cache
from pydantic import Field, AnyHttpUrl
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_NAME: str = "HealthChat API"
    ENV: str = Field(default=os.getenv("ENV", "local"))
    DEBUG: bool = Field(default=os.getenv("DEBUG", "false").lower() == "true")
    LOG_FORMAT: str = Field(default=os.getenv("LOG_FORMAT", "console"))  # "console" | "json"
    ALLOWED_ORIGINS: str | None = None  # comma-separated, production only

    # LLM (any OpenAI-compatible endpoint; defaults to Gemini's)
    LLM_API_KEY: str | None = Field(default=os.getenv("LLM_API_KEY") or os.getenv("GEMINI_API_KEY"))
    LLM_BASE_URL: str = Field(
        default=os.getenv("LLM_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/")
    )
    LLM_MODEL: str = Field(default=os.getenv("LLM_MODEL", "gemini-2.5-flash-lite"))
    LLM_TEMPERATURE: float = Field(default=float(os.getenv("LLM_TEMPERATURE", "0.7")))
    LLM_MAX_TOKENS: int = Field(default=int(os.getenv("LLM_MAX_TOKENS", "1000")))
    LLM_TIMEOUT_S: float = Field(default=float(os.getenv("LLM_TIMEOUT_S", "30")))

    # Supabase
    SUPABASE_URL: AnyHttpUrl | None = None
    SUPABASE_SERVICE_ROLE: str | None = None
    SUPABASE_ANON_KEY: str | None = None
    SUPABASE_SCHEMA: str = Field(default=os.getenv("SUPABASE_SCHEMA", "public"))

    class Config:
        env_file = (".env.backend", ".env.local", ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Cached Settings instance. Call anywhere.
    """
    return Settings()
