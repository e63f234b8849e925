"""HTTP surface: routing, auth gate, wire format and error mapping."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from healthchat.adapters.llm_client import LLMClient, LLMRateLimitError
from healthchat.core.config import Settings
from healthchat.domain.chat.service import ChatService
from healthchat.domain.conversations.repo import ConversationRepo
from healthchat.domain.conversations.service import ConversationService
from healthchat.domain.memory.repo import MemoryRepo
from healthchat.domain.memory.service import MemoryService
from healthchat.domain.safety.service import EMERGENCY_MESSAGE
from healthchat.interfaces.http.deps.auth import get_current_user
from healthchat.interfaces.http.deps.services import (
    get_chat_service,
    get_conversation_service,
    get_memory_service,
)
from healthchat.interfaces.http.main import create_app
from healthchat.interfaces.http.routers import health as health_router
from healthchat.schemas.common import ClassifyResponse

USER = {"id": "user-1", "claims": {"sub": "user-1"}}


@pytest.fixture
def app(fake_db, fake_llm):
    app = create_app()
    chat = ChatService(llm=fake_llm)
    memory = MemoryService(repo=MemoryRepo(client=fake_db))
    conversations = ConversationService(repo=ConversationRepo(client=fake_db), chat=chat, memory=memory)
    app.dependency_overrides[get_current_user] = lambda: USER
    app.dependency_overrides[get_chat_service] = lambda: chat
    app.dependency_overrides[get_memory_service] = lambda: memory
    app.dependency_overrides[get_conversation_service] = lambda: conversations
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def test_ping(client):
    r = client.get("/_/ping")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_healthz(client, monkeypatch, fake_llm):
    monkeypatch.setattr(health_router, "supa_ping", lambda readonly=True: True)
    monkeypatch.setattr(health_router, "get_llm", lambda: fake_llm)
    r = client.get("/health/healthz")
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["supabase"] is True
    assert body["llm"] is True


class TestChatEndpoint:
    def test_emergency(self, client, fake_llm):
        r = client.post("/chat", json={"messages": [{"role": "user", "content": "I think it's a STROKE"}]})
        assert r.status_code == 200
        body = r.json()
        assert body["isEmergency"] is True
        assert body["message"] == EMERGENCY_MESSAGE
        assert len(body["suggestions"]) == 3
        assert fake_llm.calls == []

    def test_normal_turn(self, client, fake_llm):
        r = client.post(
            "/chat",
            json={
                "messages": [{"role": "user", "content": "I have a cough"}],
                "language": "kn",
                "memories": ["asthma"],
            },
        )
        assert r.status_code == 200
        body = r.json()
        assert body["isEmergency"] is False
        assert body["message"] == fake_llm.reply
        assert body["suggestions"][0] == "Best remedies for cough?"
        assert "Kannada" in fake_llm.calls[0]["system"]

    def test_empty_messages_is_422(self, client):
        r = client.post("/chat", json={"messages": []})
        assert r.status_code == 422
        body = r.json()
        assert body["error"] == "validation_error"
        assert "request_id" in body

    def test_rate_limit_is_429(self, client, fake_llm):
        fake_llm.error = LLMRateLimitError("quota")
        r = client.post("/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        assert r.status_code == 429
        assert r.json()["message"] == "Rate limit exceeded. Please try again in a moment."

    def test_missing_llm_key_is_503(self, app):
        unconfigured = ChatService(llm=LLMClient(settings=Settings(LLM_API_KEY=None)))
        app.dependency_overrides[get_chat_service] = lambda: unconfigured
        r = TestClient(app).post("/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        assert r.status_code == 503
        assert r.json()["error"] == "llm_unavailable"

    def test_auth_required(self, app):
        del app.dependency_overrides[get_current_user]
        r = TestClient(app).post("/chat", json={"messages": [{"role": "user", "content": "hello"}]})
        assert r.status_code == 401

    def test_bad_auth_scheme(self, app):
        del app.dependency_overrides[get_current_user]
        r = TestClient(app).post(
            "/chat",
            json={"messages": [{"role": "user", "content": "hello"}]},
            headers={"Authorization": "Token abc"},
        )
        assert r.status_code == 401


class TestStarterEndpoint:
    def test_starters_without_auth(self, app):
        del app.dependency_overrides[get_current_user]
        r = TestClient(app).get("/chat/starters")
        assert r.status_code == 200
        starters = r.json()
        assert len(starters) == 4
        assert all(s.startswith("Tell me about ") for s in starters)


class TestSafetyEndpoints:
    def test_classify_hit(self, client):
        r = client.get("/safety/classify", params={"text": "Severe Bleeding from the arm"})
        assert r.json() == {"isEmergency": True, "keyword": "severe bleeding"}

    def test_classify_miss(self, client):
        r = client.get("/safety/classify", params={"text": "mild headache"})
        assert r.json() == {"isEmergency": False, "keyword": None}

    def test_classify_model_accepts_field_name_and_alias(self):
        by_name = ClassifyResponse(is_emergency=True, keyword="stroke")
        by_alias = ClassifyResponse.model_validate({"isEmergency": True, "keyword": "stroke"})
        assert by_name == by_alias
        assert by_name.model_dump(by_alias=True) == {"isEmergency": True, "keyword": "stroke"}

    def test_emergency_reply(self, client):
        body = client.get("/safety/emergency").json()
        assert body["isEmergency"] is True
        assert body["message"] == EMERGENCY_MESSAGE


class TestMemoryEndpoints:
    def test_crud(self, client):
        r = client.post("/memory", json={"content": "  allergic to latex ", "category": "Allergies"})
        assert r.status_code == 201
        created = r.json()
        assert created["content"] == "allergic to latex"
        assert created["user_id"] == USER["id"]

        listed = client.get("/memory").json()
        assert [m["id"] for m in listed] == [created["id"]]

        assert client.delete(f"/memory/{created['id']}").json() == {"ok": True}
        assert client.delete(f"/memory/{created['id']}").status_code == 404
        assert client.get("/memory").json() == []

    def test_empty_content_is_400(self, client):
        r = client.post("/memory", json={"content": "   "})
        assert r.status_code == 400
        assert r.json()["message"] == "Please enter a memory"

    def test_extract_dry_run(self, client, fake_db):
        r = client.post(
            "/memory/extract",
            json={
                "messages": [{"role": "user", "content": "I take metformin 500 mg per day"}],
                "existingMemories": [],
            },
        )
        assert r.status_code == 200
        assert r.json() == {
            "shouldSave": True,
            "memory": "metformin 500 mg per day",
            "category": "Medications",
            "confidence": 0.85,
        }
        assert fake_db.tables.get("memories", []) == []

    def test_extract_no_match_is_null(self, client):
        r = client.post("/memory/extract", json={"messages": [{"role": "user", "content": "thanks!"}]})
        assert r.status_code == 200
        assert r.json() is None


class TestConversationEndpoints:
    def test_send_then_browse(self, client, fake_llm):
        r = client.post("/chat/send", json={"content": "I am allergic to penicillin"})
        assert r.status_code == 200
        sent = r.json()
        conv_id = sent["conversationId"]
        assert sent["reply"]["message"] == fake_llm.reply
        assert sent["memory"]["category"] == "Allergies"

        r = client.post("/chat/send", json={"content": "what about amoxicillin?", "conversationId": conv_id})
        assert r.status_code == 200
        assert r.json()["conversationId"] == conv_id

        convs = client.get("/conversations").json()
        assert [c["id"] for c in convs] == [conv_id]
        assert convs[0]["title"] == "I am allergic to penicillin"

        assert client.get(f"/conversations/{conv_id}").json()["id"] == conv_id

        msgs = client.get(f"/conversations/{conv_id}/messages").json()
        assert [m["role"] for m in msgs] == ["user", "assistant", "user", "assistant"]

        assert client.delete(f"/conversations/{conv_id}").json() == {"ok": True}
        assert client.get("/conversations").json() == []

    def test_blank_send_is_400(self, client):
        r = client.post("/chat/send", json={"content": "   "})
        assert r.status_code == 400

    def test_unknown_conversation_is_404(self, client):
        assert client.get("/conversations/nope").status_code == 404
        assert client.get("/conversations/nope/messages").status_code == 404
        assert client.delete("/conversations/nope").status_code == 404
        r = client.post("/chat/send", json={"content": "hi", "conversationId": "nope"})
        assert r.status_code == 404
