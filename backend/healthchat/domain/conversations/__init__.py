# backend/healthchat/domain/conversations/__init__.py
from .service import ConversationNotFound, ConversationService, title_from
