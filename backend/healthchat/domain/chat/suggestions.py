# backend/healthchat/domain/chat/suggestions.py
from __future__ import annotations

import random
from typing import List, Optional, Tuple

DEFAULT_SUGGESTIONS: Tuple[str, ...] = (
    "Tell me more about this",
    "What are the symptoms?",
    "How can I prevent this?",
)

# Conversation starters for an empty thread
STARTER_TOPICS: Tuple[str, ...] = (
    "flu symptoms",
    "stress management",
    "diabetes care",
    "first aid burns",
    "heart health",
    "mental wellness",
    "nutrition advice",
    "sleep hygiene",
    "exercise benefits",
    "allergy symptoms",
    "cold remedies",
    "pain management",
    "vitamin deficiency",
    "hydration tips",
    "meditation benefits",
    "weight management",
)

STARTER_FALLBACK: Tuple[str, ...] = (
    "What are the symptoms of flu?",
    "How to manage stress?",
    "Tell me about diabetes",
    "First aid for minor burns",
)

STARTER_COUNT = 4

# (keywords, suggestions), checked in order; first bucket hit wins
SUGGESTION_BUCKETS: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = (
    (
        ("pain", "hurt"),
        (
            "How long has the pain lasted?",
            "What makes the pain better?",
            "Is the pain constant or intermittent?",
        ),
    ),
    (
        ("fever", "temperature"),
        (
            "What is my temperature?",
            "How to reduce fever naturally?",
            "When should I see a doctor?",
        ),
    ),
    (
        ("cough", "cold"),
        (
            "Best remedies for cough?",
            "How long does a cold last?",
            "When is cough serious?",
        ),
    ),
    (
        ("diet", "nutrition"),
        (
            "Balanced diet recommendations?",
            "Foods to avoid?",
            "Vitamin supplements needed?",
        ),
    ),
)


def generate_suggestions(user_message: Optional[str], assistant_message: Optional[str] = None) -> List[str]:
    """
    Follow-up prompts for the chat input, picked from the user's message only.
    `assistant_message` is accepted so callers can pass the reply along.
    """
    t = (user_message or "").lower()
    for keywords, suggestions in SUGGESTION_BUCKETS:
        if any(kw in t for kw in keywords):
            return list(suggestions)
    return list(DEFAULT_SUGGESTIONS)


def starter_suggestions(count: int = STARTER_COUNT, rng: Optional[random.Random] = None) -> List[str]:
    """
    `count` distinct "Tell me about <topic>" prompts for a new conversation.
    Falls back to the fixed starters when `count` is out of range.
    """
    if count <= 0 or count > len(STARTER_TOPICS):
        return list(STARTER_FALLBACK)
    picker = rng or random
    return [f"Tell me about {topic}" for topic in picker.sample(STARTER_TOPICS, count)]
