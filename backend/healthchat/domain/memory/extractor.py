# backend/healthchat/domain/memory/extractor.py
"""
Health-fact extraction from recent chat turns.

Scans the user's side of the conversation tail against an ordered rule table
(allergies, conditions, medications, ...). The first rule that matches wins,
so table order is the priority. The matched phrase is widened to its sentence
in the latest user message, cleaned up, and kept only if it is not a
near-duplicate of something already stored.

Public API:
- PATTERNS
- extract_memory(messages, existing_memories) -> MemoryExtraction | None
- similarity(a, b) -> float
- levenshtein_distance(a, b) -> int
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from healthchat.schemas.chat import MessageLike, role_and_content
from healthchat.schemas.memory import MemoryExtraction
from healthchat.utils.text import squash_ws

__all__ = [
    "ExtractionPattern",
    "PATTERNS",
    "TAIL_SIZE",
    "MIN_CONFIDENCE",
    "DUPLICATE_THRESHOLD",
    "MIN_LENGTH",
    "MAX_LENGTH",
    "extract_memory",
    "similarity",
    "levenshtein_distance",
]

TAIL_SIZE = 4
MIN_CONFIDENCE = 0.75       # strictly greater required
DUPLICATE_THRESHOLD = 0.75  # strictly greater is a duplicate
MIN_LENGTH = 10
MAX_LENGTH = 300


@dataclass(frozen=True)
class ExtractionPattern:
    matcher: re.Pattern
    category: str
    confidence: float


PATTERNS: tuple[ExtractionPattern, ...] = (
    ExtractionPattern(
        re.compile(r"(?:i\s+am|i'm|i\s+have|i've\s+been)\s+allergic\s+to\s+([^.,!?]+)", re.I),
        "Allergies",
        0.95,
    ),
    ExtractionPattern(
        re.compile(
            r"(?:i\s+am|i'm|i\s+have|diagnosed\s+with)\s+(type\s+\d+\s+)?"
            r"(diabetes|hypertension|asthma|epilepsy|arthritis|heart\s+disease|depression"
            r"|anxiety|migraine|crohn's|ulcerative\s+colitis|thyroid)",
            re.I,
        ),
        "Medical Conditions",
        0.9,
    ),
    ExtractionPattern(
        re.compile(
            r"(?:i\s+take|i'm\s+taking|my\s+medication|prescribed)\s+"
            r"([A-Za-z]+(?:\s+[A-Za-z]+)*"
            r"(?:\s+\d+\s*(?:mg|ml|units|times)?(?:\s+per\s+(?:day|week|month))?)?)",
            re.I,
        ),
        "Medications",
        0.85,
    ),
    ExtractionPattern(
        re.compile(r"(?:my\s+)?blood\s+(?:type|group)\s+is\s+(O|A|B|AB)[+-]?", re.I),
        "Medical Info",
        0.95,
    ),
    ExtractionPattern(
        re.compile(r"(?:i\s+am|i'm)\s+pregnant", re.I),
        "Medical Info",
        0.9,
    ),
    ExtractionPattern(
        re.compile(r"(?:i\s+have|i\s+suffer\s+from)\s+(?:a\s+)?chronic\s+([^.,!?]+)", re.I),
        "Medical Conditions",
        0.8,
    ),
)

# "I am allergic to x" -> "allergic to x"
_REDUNDANT_PREFIX_RE = re.compile(r"^[iI]\s+(am|have|take|m|'m)\s+", re.I)


def levenshtein_distance(a: str, b: str) -> int:
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        cur = [i]
        for j, cb in enumerate(b, 1):
            if ca == cb:
                cur.append(prev[j - 1])
            else:
                cur.append(min(prev[j - 1], prev[j], cur[j - 1]) + 1)
        prev = cur
    return prev[-1]


def similarity(a: str, b: str) -> float:
    """(longest - edit distance) / longest; two empty strings are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(a, b)) / longest


def _sentence_around(text: str, start: int, end: int) -> str:
    """Widen text[start:end] to the nearest periods on either side."""
    sentence_start = text.rfind(".", 0, start) + 1
    stop = text.find(".", end)
    sentence_end = stop if stop != -1 else len(text)
    return text[sentence_start:sentence_end]


def _clean(fragment: str) -> str:
    out = squash_ws(fragment)
    return _REDUNDANT_PREFIX_RE.sub("", out).strip()


def _first_match(text: str) -> Optional[tuple[re.Match, ExtractionPattern]]:
    for rule in PATTERNS:
        m = rule.matcher.search(text)
        if m:
            return m, rule
    return None


def _is_duplicate(candidate: str, existing: Iterable[str]) -> bool:
    return any(similarity(candidate, mem) > DUPLICATE_THRESHOLD for mem in existing if mem is not None)


def extract_memory(
    messages: Optional[Sequence[MessageLike]],
    existing_memories: Optional[Iterable[str]] = None,
) -> Optional[MemoryExtraction]:
    """
    Return a memory worth saving from the last few turns, or None.

    Only user turns are scanned. Patterns run over all user turns in the tail
    joined together; the stored text is cut from the latest user turn when
    the match is found there, else the matched phrase itself is used.
    """
    tail = list(messages or [])[-TAIL_SIZE:]
    user_texts: List[str] = []
    for m in tail:
        role, content = role_and_content(m)
        if role == "user":
            user_texts.append(content)
    if not user_texts:
        return None

    latest = user_texts[-1]
    hit = _first_match(" ".join(user_texts))
    if hit is None:
        return None
    match, rule = hit

    phrase = match.group(0)
    idx = latest.find(phrase)
    if idx != -1:
        candidate = _clean(_sentence_around(latest, idx, idx + len(phrase)))
    else:
        candidate = phrase.strip()

    if not candidate or rule.confidence <= MIN_CONFIDENCE:
        return None
    if not (MIN_LENGTH <= len(candidate) <= MAX_LENGTH):
        return None
    if _is_duplicate(candidate, existing_memories or ()):
        return None

    return MemoryExtraction(
        should_save=True,
        memory=candidate,
        category=rule.category or "General Health",
        confidence=rule.confidence,
    )
