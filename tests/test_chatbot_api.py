import pytest
from fastapi.testclient import TestClient

import main
from app.domain import chatbot_schema as schema
from app.services.chatbot import build_chatbot
from app.services.item_store import InMemoryItemStore, ItemStoreError


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(main.app.state, "chatbot", build_chatbot(store))
    return TestClient(main.app)


def test_message_required(client):
    for body in ({"message": "   "}, {"message": ""}, {}, {"message": 123}, {"message": None}, {"message": ["hi"]}):
        res = client.post("/chatbot/message", json=body)
        assert res.status_code == 400
        assert res.json()["detail"] == "message_required"


def test_message_too_long(client):
    res = client.post("/chatbot/message", json={"message": "a" * 1001})
    assert res.status_code == 413


def test_greeting_message(client):
    res = client.post("/chatbot/message", json={"message": "hello"})
    assert res.status_code == 200
    body = res.json()
    assert body["intent"] == "greeting"
    assert "suggestions" not in body


def test_search_message(client):
    res = client.post("/chatbot/message", json={"message": "I lost my black wallet near the library"})
    assert res.status_code == 200
    body = res.json()
    assert body["intent"] == "search_items"
    assert body["reply"] == schema.SEARCH_RESULTS_REPLY
    assert body["keywords"] == ["lost", "black", "wallet", "near", "library"]
    assert body["suggestions"][0]["id"] == 1
    assert body["suggestions"][0]["link"] == "/items/1"
    assert body["suggestions"][0]["imageUrl"] == "/uploads/w1.jpg"


def test_search_endpoint_empty(client):
    res = client.post("/chatbot/search", json={"message": "purple scarf"})
    assert res.status_code == 200
    body = res.json()
    assert body == {
        "intent": "search_items",
        "reply": schema.DIRECT_SEARCH_EMPTY_REPLY,
        "keywords": ["purple", "scarf"],
        "suggestions": [],
    }


class _BrokenStore(InMemoryItemStore):
    def find_item_candidates(self, flt, limit):
        raise ItemStoreError("candidate_fetch_failed: unavailable")

    def ping(self):
        raise ItemStoreError("ping_failed: unavailable")


def test_store_failure_returns_503(monkeypatch):
    monkeypatch.setattr(main.app.state, "chatbot", build_chatbot(_BrokenStore()))
    client = TestClient(main.app)
    res = client.post("/chatbot/message", json={"message": "I lost my black wallet near the library"})
    assert res.status_code == 503
    assert res.json()["detail"] == "item_store_unavailable"
    res = client.post("/chatbot/search", json={"message": "black wallet"})
    assert res.status_code == 503
    assert client.get("/health/db").status_code == 503


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/health/db").json() == {"status": "ok", "db": "connected"}


def test_request_id_is_echoed(client):
    res = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert res.headers["X-Request-ID"] == "abc123"
