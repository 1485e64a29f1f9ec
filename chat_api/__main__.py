import uvicorn

from chat_api.core.config import settings


def main() -> None:
    uvicorn.run(
        "chat_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
