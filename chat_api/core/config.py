from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central settings container (Pydantic v2).
    Other modules read these attributes:
      - log_level / log_path
      - database_url (+ connect retry knobs)
      - messages_default_limit / messages_max_limit
      - host / port for the uvicorn runner
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_path: str = "logs/chat_api.log"

    # DB
    # Postgres parts are only used when db_host is set; otherwise SQLite at db_path.
    db_host: str | None = None
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "chat_api"
    db_path: str = "data/chat_api.db"
    database_url: str | None = Field(default=None, validate_default=True)

    db_connect_attempts: int = 10
    db_connect_interval_seconds: float = 2.0

    @field_validator("database_url", mode="before")
    @classmethod
    def default_database_url(cls, v, info):
        if v and str(v).strip():
            return str(v).strip()
        host = info.data.get("db_host")
        if host:
            return (
                f"postgresql+psycopg2://{info.data.get('db_user')}:{info.data.get('db_password')}"
                f"@{host}:{info.data.get('db_port')}/{info.data.get('db_name')}"
            )
        db_path = (info.data.get("db_path") or "data/chat_api.db").replace("\\", "/")
        # sqlite URL: sqlite:///relative/path.db
        return f"sqlite:///{db_path}"

    # Pagination for GET /chats/{id}
    messages_default_limit: int = 20
    messages_max_limit: int = 100


settings = Settings()
