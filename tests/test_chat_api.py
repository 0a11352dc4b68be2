import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from studiobot.agents.prompts import EMPTY_MESSAGE_REPLY
from studiobot.main import create_app
from studiobot.models.conversation import Conversation
from studiobot.models.message import Message

from conftest import HangingCompletionClient, StubCompletionClient


def _messages(engine):
    with Session(engine) as session:
        return list(session.exec(select(Message).order_by(Message.id)).all())


def _conversations(engine):
    with Session(engine) as session:
        return list(session.exec(select(Conversation)).all())


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_root_lists_endpoints(client):
    assert client.get("/").json()["chat"] == "/chat"


def test_packages_question_gets_canned_reply(client, completion_client, engine):
    response = client.post("/chat", json={"message": "What packages do you offer?"})

    assert response.status_code == 200
    assert response.json()["reply"].startswith("Here are our core packages")
    assert completion_client.calls == []
    assert [m.role for m in _messages(engine)] == ["user", "assistant"]


def test_new_visitor_gets_conversation_cookie(client, engine):
    response = client.post("/chat", json={"message": "price?"})

    cid = response.cookies.get("cid")
    assert cid
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie
    assert [c.id for c in _conversations(engine)] == [cid]
    assert {m.conv_id for m in _messages(engine)} == {cid}


def test_cookie_is_reused_across_requests(client, engine):
    client.post("/chat", json={"message": "price?"})
    second = client.post("/chat", json={"message": "timeline?"})

    assert "set-cookie" not in second.headers
    assert len(_conversations(engine)) == 1
    assert len(_messages(engine)) == 4


def test_malformed_cookie_is_replaced(client, engine):
    client.cookies.set("cid", "not a valid id!")

    response = client.post("/chat", json={"message": "contact"})

    cid = response.cookies.get("cid")
    assert cid and cid != "not a valid id!"
    assert [c.id for c in _conversations(engine)] == [cid]


def test_empty_message_writes_nothing(client, engine, completion_client):
    for body in ({"message": ""}, {"message": "   "}, {}):
        response = client.post("/chat", json=body)
        assert response.status_code == 200
        assert response.json() == {"reply": EMPTY_MESSAGE_REPLY}

    assert _messages(engine) == []
    assert _conversations(engine) == []
    assert completion_client.calls == []


def test_unmatched_message_uses_completion(engine, settings):
    stub = StubCompletionClient(reply="  Let's sketch a 15-second intro.  ")
    app = create_app(settings=settings, engine=engine, completion_client=stub)

    with TestClient(app) as client:
        for i in range(6):
            client.post("/chat", json={"message": f"warm-up {i}"})
        response = client.post("/chat", json={"message": "Can you help me plan a podcast intro?"})

    assert response.json() == {"reply": "Let's sketch a 15-second intro."}
    sent = stub.calls[-1]
    assert sent[0]["role"] == "system"
    assert sent[-1] == {"role": "user", "content": "Can you help me plan a podcast intro?"}
    assert len(sent) == 12
    assert _messages(engine)[-1].content == "Let's sketch a 15-second intro."


def test_user_message_metadata_is_recorded(client, engine):
    client.post(
        "/chat",
        json={"message": "quote"},
        headers={"x-forwarded-for": "203.0.113.9, 10.0.0.1", "user-agent": "widget/1.0"},
    )

    user_message = _messages(engine)[0]
    assert user_message.ip == "203.0.113.9"
    assert user_message.ua == "widget/1.0"


def test_oversized_message_is_truncated(engine, settings):
    settings.max_message_length = 50
    app = create_app(settings=settings, engine=engine, completion_client=StubCompletionClient())

    with TestClient(app) as client:
        response = client.post("/chat", json={"message": "z" * 80})

    assert response.status_code == 200
    assert _messages(engine)[0].content == "z" * 50


def test_completion_failure_returns_generic_error(engine, settings, failing_client):
    app = create_app(settings=settings, engine=engine, completion_client=failing_client)

    with TestClient(app) as client:
        response = client.post("/chat", json={"message": "Plan my launch"})

    assert response.status_code == 500
    assert response.json() == {"error": "server_error"}
    assert [m.role for m in _messages(engine)] == ["user"]


def test_failed_first_turn_still_sets_conversation_cookie(engine, settings, failing_client):
    app = create_app(settings=settings, engine=engine, completion_client=failing_client)

    with TestClient(app) as client:
        first = client.post("/chat", json={"message": "Plan my launch"})
        second = client.post("/chat", json={"message": "Still there?"})

    assert first.status_code == 500
    cid = first.cookies.get("cid")
    assert cid
    assert second.status_code == 500
    assert "set-cookie" not in second.headers
    assert [c.id for c in _conversations(engine)] == [cid]
    assert {m.conv_id for m in _messages(engine)} == {cid}


def test_failure_with_existing_cookie_sets_no_cookie(engine, settings, failing_client):
    app = create_app(settings=settings, engine=engine, completion_client=failing_client)

    with TestClient(app) as client:
        client.cookies.set("cid", "existing123")
        response = client.post("/chat", json={"message": "Plan my launch"})

    assert response.status_code == 500
    assert "set-cookie" not in response.headers
    assert [c.id for c in _conversations(engine)] == ["existing123"]


def test_completion_timeout_returns_generic_error(engine, settings):
    settings.completion_timeout = 0.05
    app = create_app(settings=settings, engine=engine, completion_client=HangingCompletionClient())

    with TestClient(app) as client:
        response = client.post("/chat", json={"message": "Plan my launch"})

    assert response.status_code == 500
    assert response.json() == {"error": "server_error"}


def test_store_failure_returns_generic_error(engine, settings, completion_client):
    app = create_app(settings=settings, engine=engine, completion_client=completion_client)

    with TestClient(app) as client:
        # Inserts into a missing table fail inside the request
        Message.__table__.drop(engine)
        response = client.post("/chat", json={"message": "price?"})

    assert response.status_code == 500
    assert response.json() == {"error": "server_error"}


def test_history_for_current_conversation(client):
    client.post("/chat", json={"message": "timeline?"})

    history = client.get("/chat/history").json()

    assert history["conversation_id"] == client.cookies.get("cid")
    assert [m["role"] for m in history["messages"]] == ["user", "assistant"]
    assert history["messages"][0]["content"] == "timeline?"


def test_history_without_cookie_is_empty(client):
    assert client.get("/chat/history").json() == {"conversation_id": None, "messages": []}


@pytest.mark.parametrize("origin,allowed", [
    ("http://localhost:5173", True),
    ("http://127.0.0.1:3000", True),
    ("https://evil.example", False),
])
def test_cors_allows_local_frontends(client, origin, allowed):
    response = client.options(
        "/chat",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
    )

    assert (response.headers.get("access-control-allow-origin") == origin) is allowed
