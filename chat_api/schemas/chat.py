from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator

from chat_api.schemas.message import MessageOut, as_utc, null_as_empty


class ChatCreateIn(BaseModel):
    # Length is checked after trimming by the handler, so the field itself is unconstrained.
    title: StrictStr = ""

    @field_validator("title", mode="before")
    @classmethod
    def title_null_is_empty(cls, v):
        return null_as_empty(v)


class ChatOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class ChatWithMessagesOut(ChatOut):
    messages: list[MessageOut] = []
