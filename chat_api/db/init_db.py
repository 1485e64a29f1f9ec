from __future__ import annotations

import logging
import time
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

from chat_api.core.config import settings
from chat_api.db.session import Base, engine as default_engine
from chat_api.models import chat, message  # noqa: F401  (ensures models are imported for metadata)

logger = logging.getLogger(__name__)


def wait_for_db(engine: Engine, *, attempts: int, interval: float) -> None:
    """Block until the database answers `SELECT 1` or `attempts` run out."""
    last_error: OperationalError | None = None
    for attempt in range(1, attempts + 1):
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return
        except OperationalError as exc:
            last_error = exc
            logger.warning("Waiting for database (attempt %d/%d): %s", attempt, attempts, exc)
            if attempt < attempts:
                time.sleep(interval)
    if last_error is not None:
        raise last_error


def init_db(engine: Engine | None = None) -> None:
    engine = engine or default_engine

    if engine.url.get_backend_name() == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)

    wait_for_db(
        engine,
        attempts=max(1, settings.db_connect_attempts),
        interval=settings.db_connect_interval_seconds,
    )
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready: %s", engine.url.render_as_string(hide_password=True))
