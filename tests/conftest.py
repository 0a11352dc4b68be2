"""Shared fixtures: in-memory database, stub completion client, test app."""
import asyncio
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from studiobot.agents.subagents.completion_client import CompletionError
from studiobot.config import Settings
from studiobot.db.config import build_engine
from studiobot.db.init import init_db
from studiobot.main import create_app

ADMIN_SECRET = "test-admin-secret"


class StubCompletionClient:
    """Deterministic completion client that records every call"""

    def __init__(self, reply: str = "Happy to help with that.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls: List[List[Dict[str, str]]] = []

    async def complete(self, messages: List[Dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.reply


class HangingCompletionClient:
    """Completion client that never answers within the timeout"""

    def __init__(self):
        self.calls = 0

    async def complete(self, messages):
        self.calls += 1
        await asyncio.sleep(10)
        return "too late"


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        admin_jwt_secret=ADMIN_SECRET,
        completion_timeout=1.0,
    )


@pytest.fixture
def completion_client():
    return StubCompletionClient()


@pytest.fixture
def app(settings, engine, completion_client):
    return create_app(settings=settings, engine=engine, completion_client=completion_client)


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def failing_client():
    return StubCompletionClient(error=CompletionError("quota exceeded"))
