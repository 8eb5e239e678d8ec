"""
Use cases: Browse and delete a user's chat sessions.

Sessions are always scoped to their owner; a session belonging to
someone else is reported as not found.
"""

import logging
from uuid import UUID

from cryptofund.application.advisor.dtos import ChatHistoryItem
from cryptofund.domain.advisor.entities import ChatCategory, ChatSession
from cryptofund.domain.advisor.errors import ChatSessionNotFoundError
from cryptofund.domain.advisor.ports import ChatSessionRepository

logger = logging.getLogger(__name__)


class GetChatHistoryUseCase:
    """Lists a user's recent sessions with a short preview of each."""

    def __init__(self, session_repo: ChatSessionRepository) -> None:
        self._session_repo = session_repo

    def execute(
        self,
        user_id: UUID,
        category: ChatCategory = ChatCategory.STOCKS,
        limit: int = 10,
    ) -> list[ChatHistoryItem]:
        sessions = self._session_repo.list_for_user(user_id, category, limit=limit)
        return [
            ChatHistoryItem(
                id=session.id,
                title=session.title,
                preview=session.preview,
                timestamp=session.updated_at,
            )
            for session in sessions
        ]


class GetChatSessionUseCase:
    """Fetches one of the caller's sessions with all its messages."""

    def __init__(self, session_repo: ChatSessionRepository) -> None:
        self._session_repo = session_repo

    def execute(self, user_id: UUID, session_id: UUID) -> ChatSession:
        session = self._session_repo.get_for_user(session_id, user_id)
        if session is None:
            raise ChatSessionNotFoundError(str(session_id))
        return session


class DeleteChatSessionUseCase:
    """Deletes one of the caller's sessions."""

    def __init__(self, session_repo: ChatSessionRepository) -> None:
        self._session_repo = session_repo

    def execute(self, user_id: UUID, session_id: UUID) -> None:
        """Delete the session.

        Raises:
            ChatSessionNotFoundError: If the caller owns no such session.
        """
        if not self._session_repo.delete(session_id, user_id):
            raise ChatSessionNotFoundError(str(session_id))
        logger.info("Deleted chat session %s", session_id)
