from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from chat_api.core.config import settings
from chat_api.core.errors import ChatAPIError
from chat_api.core.logging import setup_logging
from chat_api.db.init_db import init_db
from chat_api.middleware.json_content_type import json_content_type_middleware
from chat_api.middleware.request_logging import request_logging_middleware
from chat_api.routers.chats import router as chats_router
from chat_api.routers.health import router as health_router

logger = logging.getLogger(__name__)


async def chat_api_error_handler(request: Request, exc: ChatAPIError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"detail": "invalid request"})


def create_app(*, init_database: bool = True) -> FastAPI:
    setup_logging()

    app = FastAPI(title="Chat API", version="1.0.0")

    # Middleware: the last one added runs first, so requests are logged with the final status
    app.middleware("http")(json_content_type_middleware)
    app.middleware("http")(request_logging_middleware)

    app.add_exception_handler(ChatAPIError, chat_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Routers
    app.include_router(chats_router)
    app.include_router(health_router)

    if init_database:

        @app.on_event("startup")
        def on_startup():
            logger.info("Starting up: init DB (%s)", settings.database_url.split("://", 1)[0])
            init_db()

    return app


app = create_app()
