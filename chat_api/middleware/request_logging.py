from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request, Response

logger = logging.getLogger("request")


async def request_logging_middleware(request: Request, call_next: Callable) -> Response:
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception:
        duration_ms = (time.perf_counter() - start) * 1000.0
        logger.exception("%s %s -> ERR (%.1f ms)", request.method, request.url.path, duration_ms)
        raise

    duration_ms = (time.perf_counter() - start) * 1000.0
    logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, duration_ms)
    return response
