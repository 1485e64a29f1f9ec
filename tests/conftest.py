from __future__ import annotations

import os
import tempfile
from datetime import datetime, timedelta

# Keep test runs away from the real log file and database
os.environ.setdefault("LOG_PATH", os.path.join(tempfile.mkdtemp(prefix="chat_api_logs_"), "test.log"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chat_api.db.session import Base, get_db, make_engine
from chat_api.main import create_app
from chat_api.models.chat import Chat
from chat_api.models.message import Message


@pytest.fixture()
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    app = create_app(init_database=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture()
def make_chat(db):
    def _make_chat(title: str = "Chat") -> Chat:
        chat = Chat(title=title)
        db.add(chat)
        db.commit()
        db.refresh(chat)
        return chat

    return _make_chat


@pytest.fixture()
def add_messages(db):
    """Insert messages with strictly increasing timestamps, one second apart."""

    def _add_messages(chat_id: int, texts: list[str], *, start: datetime | None = None) -> list[Message]:
        start = start or datetime(2024, 1, 1, 12, 0, 0)
        rows = [
            Message(chat_id=chat_id, text=text, created_at=start + timedelta(seconds=i))
            for i, text in enumerate(texts)
        ]
        db.add_all(rows)
        db.commit()
        return rows

    return _add_messages
