# backend/healthchat/domain/chat/prompt.py
from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from healthchat.schemas.chat import MessageLike, role_and_content

DISCLAIMER = (
    "⚠️ I'm an AI assistant and not a substitute for professional medical advice. "
    "For medical concerns, please consult a healthcare provider. "
    "In emergencies, contact local emergency services immediately."
)

HEALTH_SYSTEM_PROMPT = f"""You are a compassionate and professional health assistant. Follow these guidelines:

1. Provide accurate, helpful health information while being empathetic and supportive.
2. Always include this disclaimer at the end of your responses: "{DISCLAIMER}"
3. If the user mentions emergency symptoms (severe chest pain, difficulty breathing, severe bleeding, unconsciousness, stroke symptoms), immediately prioritize safety and urge them to seek emergency care.
4. Provide information in a clear, easy-to-understand manner.
5. When suggesting follow-up actions, be specific and actionable.
6. Respect cultural and language preferences.
7. Never diagnose conditions or prescribe treatments."""

LANGUAGES: Dict[str, str] = {
    "en": "English",
    "te": "Telugu",
    "kn": "Kannada",
    "hi": "Hindi",
}


def language_name(code: Optional[str]) -> str:
    code = (code or "en").strip()
    return LANGUAGES.get(code.lower(), code)


def build_system_prompt(language: Optional[str] = "en", memories: Optional[Iterable[str]] = None) -> str:
    parts = [HEALTH_SYSTEM_PROMPT]

    lang = (language or "en").strip()
    if lang.lower() != "en":
        name = language_name(lang)
        parts.append(
            f"IMPORTANT: The user prefers {name} language. "
            f"Respond in {name} while maintaining medical accuracy."
        )

    mems = [m.strip() for m in (memories or []) if m and m.strip()]
    if mems:
        listed = "\n".join(f"- {m}" for m in mems)
        parts.append(
            "USER MEMORY CONTEXT (Important information about the user):\n"
            f"{listed}\n\n"
            "Use this information to provide personalized, relevant health advice. "
            "Always consider the user's medical history, allergies, medications, "
            "and conditions when responding."
        )

    return "\n\n".join(parts)


def to_llm_messages(messages: Iterable[MessageLike]) -> List[Dict[str, str]]:
    """User/assistant turns in order; system turns live in the system prompt."""
    out: List[Dict[str, str]] = []
    for m in messages:
        role, content = role_and_content(m)
        if role == "system":
            continue
        out.append({"role": "assistant" if role == "assistant" else "user", "content": content})
    return out
