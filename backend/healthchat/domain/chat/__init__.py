# backend/healthchat/domain/chat/__init__.py
from .prompt import HEALTH_SYSTEM_PROMPT, LANGUAGES, build_system_prompt, to_llm_messages
from .service import ChatService
from .suggestions import DEFAULT_SUGGESTIONS, generate_suggestions, starter_suggestions
