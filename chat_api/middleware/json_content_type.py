from __future__ import annotations

from typing import Callable

from fastapi import Request, Response

JSON_MEDIA_TYPE = "application/json"


async def json_content_type_middleware(request: Request, call_next: Callable) -> Response:
    response: Response = await call_next(request)
    # Handlers that pick their own media type (docs pages) keep it
    response.headers.setdefault("content-type", JSON_MEDIA_TYPE)
    return response
