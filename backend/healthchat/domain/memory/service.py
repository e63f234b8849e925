# -*- coding: utf-8 -*-
"""
Memory Service: a user's stored health facts

Responsibilities
- List / add / delete memories in the hosted `memories` table
- After each chat turn, mine the conversation tail for a new fact and store it

capture() is best-effort: any failure is logged and swallowed so that chat
delivery never depends on it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from healthchat.domain.memory.extractor import MAX_LENGTH, extract_memory
from healthchat.domain.memory.repo import MemoryRepo
from healthchat.schemas.chat import MessageLike
from healthchat.schemas.memory import MemoryExtraction

log = logging.getLogger("healthchat.memory")


class MemoryValidationError(ValueError):
    pass


class MemoryService:
    def __init__(self, repo: Optional[MemoryRepo] = None):
        self.repo = repo or MemoryRepo()

    # ---- reads ---------------------------------------------------------------
    def list(self, user_id: str) -> List[Dict[str, Any]]:
        return self.repo.list_for_user(user_id)

    def contents(self, user_id: str) -> List[str]:
        return self.repo.contents_for_user(user_id)

    # ---- writes --------------------------------------------------------------
    def add(self, user_id: str, content: str, category: Optional[str] = None) -> Dict[str, Any]:
        """Manual add from the memory manager."""
        text = (content or "").strip()
        if not text:
            raise MemoryValidationError("Please enter a memory")
        if len(text) > MAX_LENGTH:
            raise MemoryValidationError(f"Memory must be at most {MAX_LENGTH} characters")
        cat = (category or "").strip() or None
        row = self.repo.insert(user_id, text, cat)
        log.info("memory added for %s (category=%s)", user_id, cat)
        return row

    def delete(self, user_id: str, memory_id: str) -> bool:
        ok = self.repo.delete(user_id, memory_id)
        if not ok:
            log.info("memory %s not found for %s", memory_id, user_id)
        return ok

    def capture(
        self,
        user_id: str,
        messages: Sequence[MessageLike],
        existing: Optional[Sequence[str]] = None,
    ) -> Optional[MemoryExtraction]:
        """
        Run the extractor over the latest turns and persist a hit.
        Never raises.
        """
        try:
            known = list(existing) if existing is not None else self.repo.contents_for_user(user_id)
            found = extract_memory(messages, known)
            if found is None:
                return None
            self.repo.insert(user_id, found.memory, found.category)
            log.info("captured %s memory for %s (confidence=%.2f)", found.category, user_id, found.confidence)
            return found
        except Exception as e:
            log.warning("memory capture failed for %s: %s", user_id, e)
            return None
