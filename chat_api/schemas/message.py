from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


def null_as_empty(v):
    # JSON null decodes like an absent field
    return "" if v is None else v


def as_utc(v: datetime) -> datetime:
    # Rows store naive UTC; responses carry the offset
    return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v


class MessageCreateIn(BaseModel):
    text: StrictStr = ""

    @field_validator("text", mode="before")
    @classmethod
    def text_null_is_empty(cls, v):
        return null_as_empty(v)


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    chat_id: int
    text: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)
