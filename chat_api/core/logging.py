from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from chat_api.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging() -> None:
    level = _resolve_level(settings.log_level)
    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers if reloaded
    if any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        return

    log_file = Path(settings.log_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            filename=str(log_file),
            maxBytes=5 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        ),
        logging.StreamHandler(),
    ]
    for handler in handlers:
        handler.setFormatter(fmt)
        handler.setLevel(level)
        root.addHandler(handler)

    # The "request" logger already records every call
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
