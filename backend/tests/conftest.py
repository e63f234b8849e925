# backend/tests/conftest.py
"""
Shared fakes: an in-memory stand-in for the Supabase table API and a
recording LLM. Nothing here touches the network.
"""
from __future__ import annotations

import os
import sys
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

THIS_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(THIS_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest


class _Result:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class _Query:
    """Just enough of the postgrest builder: select/insert/update/delete, eq, order, limit."""

    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name
        self._op = "select"
        self._payload: Optional[Dict[str, Any]] = None
        self._filters: List[tuple] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    def select(self, *_cols: str) -> "_Query":
        self._op = "select"
        return self

    def insert(self, row: Dict[str, Any]) -> "_Query":
        self._op, self._payload = "insert", dict(row)
        return self

    def update(self, patch: Dict[str, Any]) -> "_Query":
        self._op, self._payload = "update", dict(patch)
        return self

    def delete(self) -> "_Query":
        self._op = "delete"
        return self

    def eq(self, key: str, value: Any) -> "_Query":
        self._filters.append((key, value))
        return self

    def order(self, column: str, desc: bool = False) -> "_Query":
        self._order = (column, desc)
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def execute(self) -> _Result:
        if self.name in self.db.failing:
            raise RuntimeError(f"{self.name} unavailable")
        rows = self.db.tables.setdefault(self.name, [])

        if self._op == "insert":
            ts = self.db.next_ts()
            row = {"id": str(uuid.uuid4()), "created_at": ts, "updated_at": ts, **(self._payload or {})}
            rows.append(row)
            return _Result([dict(row)])

        matched = [r for r in rows if all(r.get(k) == v for k, v in self._filters)]

        if self._op == "delete":
            for r in matched:
                rows.remove(r)
            return _Result([dict(r) for r in matched])

        if self._op == "update":
            for r in matched:
                r.update(self._payload or {})
            return _Result([dict(r) for r in matched])

        if self._order:
            col, desc = self._order
            matched = sorted(matched, key=lambda r: r.get(col) or "", reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return _Result([dict(r) for r in matched])


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.failing: set[str] = set()
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def next_ts(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat()

    def table(self, name: str) -> _Query:
        return _Query(self, name)


class FakeLLM:
    def __init__(self, reply: str = "Rest and drink plenty of fluids."):
        self.reply = reply
        self.error: Optional[Exception] = None
        self.calls: List[Dict[str, Any]] = []
        self.configured = True

    def complete(self, system_prompt: str, messages: List[Dict[str, str]]) -> str:
        self.calls.append({"system": system_prompt, "messages": list(messages)})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_db() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()
