from __future__ import annotations

from typing import Optional

import pydantic
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from chat_api.core.config import settings
from chat_api.core.errors import ValidationError
from chat_api.db.session import get_db
from chat_api.schemas.chat import ChatCreateIn, ChatOut, ChatWithMessagesOut
from chat_api.schemas.message import MessageCreateIn, MessageOut
from chat_api.services import chat_service

router = APIRouter(prefix="/chats", tags=["chats"])

# Ids are signed 64-bit integers in every supported backend
MAX_CHAT_ID = 2**63 - 1


async def raw_body(request: Request) -> bytes:
    # Bodies are decoded inside the handlers so that id and existence checks run first.
    return await request.body()


def _is_ascii_int(raw: str) -> bool:
    digits = raw[1:] if raw[:1] in ("+", "-") else raw
    return digits.isascii() and digits.isdigit()


def parse_chat_id(raw: str) -> int:
    if not raw.isascii() or not raw.isdigit():
        raise ValidationError("invalid chat id")
    chat_id = int(raw)
    if chat_id <= 0 or chat_id > MAX_CHAT_ID:
        raise ValidationError("invalid chat id")
    return chat_id


def resolve_limit(raw: Optional[str]) -> int:
    """Window size for GET /chats/{id}; bad values fall back to the default."""
    default = settings.messages_default_limit
    if raw is None or raw == "":
        return default
    if not _is_ascii_int(raw):
        return default
    limit = int(raw)
    if limit <= 0:
        return default
    return min(limit, settings.messages_max_limit)


def _decode(schema: type[pydantic.BaseModel], body: bytes):
    try:
        return schema.model_validate_json(body)
    except pydantic.ValidationError:
        raise ValidationError("invalid body")


@router.post("", response_model=ChatOut, status_code=201)
def create_chat(body: bytes = Depends(raw_body), db: Session = Depends(get_db)) -> ChatOut:
    payload = _decode(ChatCreateIn, body)
    title = chat_service.clean_title(payload.title)

    chat = chat_service.create_chat(db, title=title)
    return ChatOut.model_validate(chat)


@router.post("/{chat_id}/messages", response_model=MessageOut, status_code=201)
def create_message(chat_id: str, body: bytes = Depends(raw_body), db: Session = Depends(get_db)) -> MessageOut:
    cid = parse_chat_id(chat_id)
    chat_service.get_chat(db, chat_id=cid)

    payload = _decode(MessageCreateIn, body)
    text = chat_service.clean_text(payload.text)

    msg = chat_service.create_message(db, chat_id=cid, text=text)
    return MessageOut.model_validate(msg)


@router.get("/{chat_id}", response_model=ChatWithMessagesOut)
def get_chat(chat_id: str, limit: Optional[str] = None, db: Session = Depends(get_db)) -> ChatWithMessagesOut:
    window = resolve_limit(limit)
    cid = parse_chat_id(chat_id)
    chat = chat_service.get_chat(db, chat_id=cid)

    messages = chat_service.recent_messages(db, chat_id=cid, limit=window)
    return ChatWithMessagesOut(
        id=chat.id,
        title=chat.title,
        created_at=chat.created_at,
        messages=[MessageOut.model_validate(m) for m in messages],
    )


@router.delete("/{chat_id}", status_code=204)
def delete_chat(chat_id: str, db: Session = Depends(get_db)) -> Response:
    cid = parse_chat_id(chat_id)
    chat_service.delete_chat(db, chat_id=cid)
    return Response(status_code=204)
