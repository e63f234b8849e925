# backend/healthchat/adapters/llm_client.py
"""
Chat-completions client for the hosted language model.

Talks to any OpenAI-compatible endpoint through the `openai` SDK. The default
configuration points at Gemini's OpenAI-compatible surface.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from healthchat.core.config import Settings, get_settings

log = logging.getLogger("healthchat.llm")

__all__ = [
    "LLMClient",
    "LLMError",
    "LLMNotConfiguredError",
    "LLMRateLimitError",
    "get_llm",
]


class LLMError(Exception):
    """Upstream model call failed."""


class LLMNotConfiguredError(LLMError):
    pass


class LLMRateLimitError(LLMError):
    pass


def _extract_content(resp: Any) -> str:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return ""
    msg = getattr(choices[0], "message", None)
    content = getattr(msg, "content", None) if msg is not None else None
    return str(content) if content else ""


class LLMClient:
    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self.settings.LLM_API_KEY)

    def _get_client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.LLM_API_KEY:
                raise LLMNotConfiguredError("LLM_API_KEY is not configured")
            self._client = OpenAI(
                api_key=self.settings.LLM_API_KEY,
                base_url=self.settings.LLM_BASE_URL,
                timeout=self.settings.LLM_TIMEOUT_S,
            )
        return self._client

    def complete(self, system_prompt: str, messages: List[Dict[str, str]]) -> str:
        """
        Run one completion. `messages` are user/assistant turns in order;
        the system prompt is prepended here.
        """
        cli = self._get_client()
        payload = [{"role": "system", "content": system_prompt}, *messages]
        log.info("calling %s with %d turns", self.settings.LLM_MODEL, len(messages))
        try:
            resp = cli.chat.completions.create(
                model=self.settings.LLM_MODEL,
                messages=payload,  # type: ignore[arg-type]
                temperature=self.settings.LLM_TEMPERATURE,
                max_tokens=self.settings.LLM_MAX_TOKENS,
            )
        except openai.RateLimitError as e:
            log.warning("llm rate limited: %s", e)
            raise LLMRateLimitError("Rate limit exceeded. Please try again in a moment.") from e
        except openai.APIError as e:
            log.error("llm error: %s", e)
            raise LLMError(f"LLM error: {e}") from e
        return _extract_content(resp)


_llm: Optional[LLMClient] = None


def get_llm() -> LLMClient:
    """Process-wide client; the underlying SDK client is built on first use."""
    global _llm
    if _llm is None:
        _llm = LLMClient()
    return _llm
