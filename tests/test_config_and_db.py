from __future__ import annotations

import pytest
from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import OperationalError

from chat_api.core.config import Settings
from chat_api.db.init_db import init_db, wait_for_db
from chat_api.db.session import make_engine


def test_database_url_defaults_to_sqlite_file(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    s = Settings(_env_file=None, db_path="some/dir/app.db")
    assert s.database_url == "sqlite:///some/dir/app.db"


def test_database_url_from_postgres_parts(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    s = Settings(_env_file=None, db_host="db", db_user="u", db_password="p", db_name="chats")
    assert s.database_url == "postgresql+psycopg2://u:p@db:5432/chats"


def test_explicit_database_url_wins(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "  sqlite:///elsewhere.db ")
    s = Settings(_env_file=None, db_host="db")
    assert s.database_url == "sqlite:///elsewhere.db"


def test_pagination_defaults(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    s = Settings(_env_file=None)
    assert s.messages_default_limit == 20
    assert s.messages_max_limit == 100


def test_init_db_creates_schema_and_parent_dir(tmp_path):
    db_file = tmp_path / "nested" / "chat.db"
    engine = make_engine(f"sqlite:///{db_file.as_posix()}")
    try:
        init_db(engine)
        assert db_file.exists()
        tables = set(inspect(engine).get_table_names())
        assert {"chats", "messages"} <= tables
        fks = inspect(engine).get_foreign_keys("messages")
        assert fks[0]["referred_table"] == "chats"
        assert fks[0]["options"].get("ondelete") == "CASCADE"
    finally:
        engine.dispose()


def test_sqlite_connections_enforce_foreign_keys(tmp_path):
    engine = make_engine(f"sqlite:///{(tmp_path / 'fk.db').as_posix()}")
    try:
        with engine.connect() as conn:
            assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1
    finally:
        engine.dispose()


def test_wait_for_db_gives_up(tmp_path):
    engine = create_engine(f"sqlite:///{(tmp_path / 'missing' / 'x.db').as_posix()}")
    try:
        with pytest.raises(OperationalError):
            wait_for_db(engine, attempts=2, interval=0)
    finally:
        engine.dispose()


def test_setup_logging_is_idempotent():
    import logging
    from logging.handlers import RotatingFileHandler

    from chat_api.core.logging import setup_logging

    setup_logging()
    setup_logging()
    root = logging.getLogger()
    assert sum(isinstance(h, RotatingFileHandler) for h in root.handlers) == 1
