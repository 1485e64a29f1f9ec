from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from chat_api.core.errors import NotFoundError, StorageError, ValidationError
from chat_api.models.chat import Chat
from chat_api.models.message import Message

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200
TEXT_MAX_LENGTH = 5000


def clean_title(title: str) -> str:
    title = title.strip()
    if not title or len(title) > TITLE_MAX_LENGTH:
        raise ValidationError("invalid title length")
    return title


def clean_text(text: str) -> str:
    text = text.strip()
    if not text or len(text) > TEXT_MAX_LENGTH:
        raise ValidationError("invalid text length")
    return text


def create_chat(db: Session, *, title: str) -> Chat:
    chat = Chat(title=title)
    try:
        db.add(chat)
        db.commit()
        db.refresh(chat)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create chat")
        raise StorageError() from exc
    logger.info("Created chat id=%s", chat.id)
    return chat


def get_chat(db: Session, *, chat_id: int) -> Chat:
    try:
        chat = db.execute(select(Chat).where(Chat.id == chat_id)).scalar_one_or_none()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load chat id=%s", chat_id)
        raise StorageError() from exc
    if chat is None:
        raise NotFoundError("chat not found")
    return chat


def create_message(db: Session, *, chat_id: int, text: str) -> Message:
    """Insert a message into an existing chat.

    Callers check that the chat exists first, but a concurrent delete can still
    remove it before the insert. The foreign key rejects the row in that case
    and the violation is reported as a missing chat.
    """
    msg = Message(chat_id=chat_id, text=text)
    try:
        db.add(msg)
        db.commit()
        db.refresh(msg)
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Message insert rejected for chat id=%s: %s", chat_id, exc.orig)
        raise NotFoundError("chat not found") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to create message in chat id=%s", chat_id)
        raise StorageError() from exc
    return msg


def recent_messages(db: Session, *, chat_id: int, limit: int) -> list[Message]:
    """Return the `limit` newest messages of a chat, oldest first."""
    q = (
        select(Message)
        .where(Message.chat_id == chat_id)
        .order_by(Message.created_at.desc(), Message.id.desc())
        .limit(limit)
    )
    try:
        rows = db.execute(q).scalars().all()
    except SQLAlchemyError as exc:
        logger.exception("Failed to load messages for chat id=%s", chat_id)
        raise StorageError() from exc

    # Newest-first page, flipped to chronological order
    return list(reversed(rows))


def delete_chat(db: Session, *, chat_id: int) -> None:
    try:
        result = db.execute(delete(Chat).where(Chat.id == chat_id))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete chat id=%s", chat_id)
        raise StorageError() from exc

    if result.rowcount == 0:
        raise NotFoundError("chat not found")
    logger.info("Deleted chat id=%s", chat_id)
