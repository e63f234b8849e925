"""Follow-up suggestion buckets, conversation starters and system-prompt assembly."""

from __future__ import annotations

import random

import pytest

from healthchat.domain.chat.prompt import (
    DISCLAIMER,
    HEALTH_SYSTEM_PROMPT,
    build_system_prompt,
    language_name,
    to_llm_messages,
)
from healthchat.domain.chat.suggestions import (
    DEFAULT_SUGGESTIONS,
    STARTER_FALLBACK,
    STARTER_TOPICS,
    generate_suggestions,
    starter_suggestions,
)

PAIN = ["How long has the pain lasted?", "What makes the pain better?", "Is the pain constant or intermittent?"]
FEVER = ["What is my temperature?", "How to reduce fever naturally?", "When should I see a doctor?"]
COUGH = ["Best remedies for cough?", "How long does a cold last?", "When is cough serious?"]
DIET = ["Balanced diet recommendations?", "Foods to avoid?", "Vitamin supplements needed?"]


class TestSuggestions:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I have a fever", FEVER),
            ("my Temperature is 39", FEVER),
            ("my back hurts", PAIN),
            ("sharp pain in my side", PAIN),
            ("I caught a cold", COUGH),
            ("dry cough at night", COUGH),
            ("what diet should I follow", DIET),
            ("good nutrition for kids", DIET),
        ],
    )
    def test_buckets(self, text: str, expected: list):
        assert generate_suggestions(text) == expected

    def test_default_when_no_bucket(self):
        assert generate_suggestions("hello there") == list(DEFAULT_SUGGESTIONS)
        assert generate_suggestions("hello there") == [
            "Tell me more about this",
            "What are the symptoms?",
            "How can I prevent this?",
        ]

    def test_pain_bucket_checked_before_fever(self):
        assert generate_suggestions("fever and pain") == PAIN

    def test_empty_and_none(self):
        assert generate_suggestions("") == list(DEFAULT_SUGGESTIONS)
        assert generate_suggestions(None) == list(DEFAULT_SUGGESTIONS)

    def test_assistant_text_does_not_change_bucket(self):
        assert generate_suggestions("hello", "You may have a fever") == list(DEFAULT_SUGGESTIONS)


class TestStarterSuggestions:
    def test_four_distinct_topic_prompts(self):
        starters = starter_suggestions(rng=random.Random(7))
        assert len(starters) == 4
        assert len(set(starters)) == 4
        topics = {f"Tell me about {t}" for t in STARTER_TOPICS}
        assert set(starters) <= topics

    def test_seeded_rng_is_repeatable(self):
        assert starter_suggestions(rng=random.Random(3)) == starter_suggestions(rng=random.Random(3))

    def test_whole_topic_list(self):
        starters = starter_suggestions(len(STARTER_TOPICS), rng=random.Random(1))
        assert sorted(starters) == sorted(f"Tell me about {t}" for t in STARTER_TOPICS)

    @pytest.mark.parametrize("count", [0, -1, 17])
    def test_out_of_range_count_uses_fallback(self, count: int):
        assert starter_suggestions(count) == list(STARTER_FALLBACK)


class TestSystemPrompt:
    def test_english_without_memories_is_base_prompt(self):
        assert build_system_prompt("en", []) == HEALTH_SYSTEM_PROMPT
        assert DISCLAIMER in HEALTH_SYSTEM_PROMPT

    def test_known_language_uses_name(self):
        prompt = build_system_prompt("hi")
        assert "The user prefers Hindi language" in prompt
        assert "Respond in Hindi" in prompt

    def test_unknown_language_passes_through(self):
        assert "The user prefers fr language" in build_system_prompt("fr")

    def test_language_names(self):
        assert language_name("te") == "Telugu"
        assert language_name("KN") == "Kannada"
        assert language_name(None) == "English"

    def test_memories_block(self):
        prompt = build_system_prompt("en", ["allergic to penicillin", "  ", "metformin 500 mg per day"])
        assert "USER MEMORY CONTEXT" in prompt
        assert "- allergic to penicillin\n- metformin 500 mg per day" in prompt

    def test_no_memory_block_for_blank_memories(self):
        assert "USER MEMORY CONTEXT" not in build_system_prompt("en", ["", "   "])


class TestLLMMessages:
    def test_system_turns_dropped_and_order_kept(self):
        msgs = [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "a"},
            {"role": "assistant", "content": "b"},
            {"role": "user", "content": "c"},
        ]
        assert to_llm_messages(msgs) == [
            {"role": "user", "content": "a"},
            {"role": "assistant", "content": "b"},
            {"role": "user", "content": "c"},
        ]
