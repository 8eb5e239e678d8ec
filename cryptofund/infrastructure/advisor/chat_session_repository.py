"""
Adapter: Chat session repository.

Implements ChatSessionRepository port.
Messages are stored as a JSON array on the session row.
"""

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine, RowMapping

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    ChatMessage,
    ChatRole,
    ChatSession,
)
from cryptofund.domain.advisor.ports import ChatSessionRepository
from cryptofund.infrastructure.database import chat_sessions

logger = logging.getLogger(__name__)


def _message_to_json(message: ChatMessage) -> dict[str, Any]:
    return {
        "role": message.role.value,
        "content": message.content,
        "timestamp": message.timestamp.isoformat(),
    }


def _message_from_json(data: dict[str, Any]) -> ChatMessage:
    return ChatMessage(
        role=ChatRole(data["role"]),
        content=data["content"],
        timestamp=datetime.fromisoformat(data["timestamp"]),
    )


def _to_entity(row: RowMapping) -> ChatSession:
    return ChatSession(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        category=ChatCategory(row["category"]),
        messages=[_message_from_json(m) for m in row["messages"] or []],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class ChatSessionRepositoryAdapter(ChatSessionRepository):
    """SQLAlchemy implementation of the chat session repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def create(self, session: ChatSession) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(chat_sessions).values(
                    id=session.id,
                    user_id=session.user_id,
                    title=session.title,
                    category=session.category.value,
                    messages=[_message_to_json(m) for m in session.messages],
                    created_at=session.created_at,
                    updated_at=session.updated_at,
                )
            )

    def get_for_user(self, session_id: UUID, user_id: UUID) -> Optional[ChatSession]:
        query = select(chat_sessions).where(
            chat_sessions.c.id == session_id,
            chat_sessions.c.user_id == user_id,
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        return _to_entity(row) if row else None

    def append_messages(
        self, session_id: UUID, messages: list[ChatMessage], updated_at: datetime
    ) -> None:
        """Append messages under a row lock so concurrent turns are not lost."""
        with self._engine.begin() as conn:
            current = conn.execute(
                select(chat_sessions.c.messages)
                .where(chat_sessions.c.id == session_id)
                .with_for_update()
            ).scalar_one_or_none()
            if current is None:
                logger.warning("Cannot append to missing chat session %s", session_id)
                return
            conn.execute(
                update(chat_sessions)
                .where(chat_sessions.c.id == session_id)
                .values(
                    messages=list(current) + [_message_to_json(m) for m in messages],
                    updated_at=updated_at,
                )
            )

    def list_for_user(
        self, user_id: UUID, category: ChatCategory, limit: int = 10
    ) -> list[ChatSession]:
        query = (
            select(chat_sessions)
            .where(
                chat_sessions.c.user_id == user_id,
                chat_sessions.c.category == category.value,
            )
            .order_by(chat_sessions.c.updated_at.desc())
            .limit(limit)
        )
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_entity(row) for row in rows]

    def delete(self, session_id: UUID, user_id: UUID) -> bool:
        statement = delete(chat_sessions).where(
            chat_sessions.c.id == session_id,
            chat_sessions.c.user_id == user_id,
        )
        with self._engine.begin() as conn:
            return conn.execute(statement).rowcount == 1
