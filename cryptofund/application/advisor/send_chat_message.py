"""
Use case: Handle one turn of the advisor chat.

Input: SendChatMessageCommand (user_id, message, session_id, category)
Output: ChatReply
Side effects: Creates or appends to a ChatSession; may persist a
    StockPrediction through GeneratePredictionUseCase.
Failure cases: ChatSessionNotFoundError. Model and market data failures
    are absorbed into a fallback reply.
"""

import logging

from cryptofund.application.advisor.dtos import (
    ChatReply,
    GeneratePredictionCommand,
    SendChatMessageCommand,
)
from cryptofund.application.advisor.generate_prediction import GeneratePredictionUseCase
from cryptofund.domain.advisor.chat_topics import (
    FALLBACK_REPLY,
    extract_symbol,
    generate_session_title,
)
from cryptofund.domain.advisor.entities import (
    ChatCategory,
    ChatMessage,
    ChatRole,
    ChatSession,
    utcnow,
)
from cryptofund.domain.advisor.errors import (
    AdvisorServiceError,
    ChatSessionNotFoundError,
    MarketDataError,
)
from cryptofund.domain.advisor.ports import ChatSessionRepository, StockAdvisorPort

logger = logging.getLogger(__name__)


class SendChatMessageUseCase:
    """Routes a chat message to a stock analysis or a general answer.

    Messages that mention a ticker in the stocks category produce a stored
    prediction. Everything else gets a single general-purpose reply.
    """

    def __init__(
        self,
        session_repo: ChatSessionRepository,
        advisor: StockAdvisorPort,
        generate_prediction: GeneratePredictionUseCase,
    ) -> None:
        self._session_repo = session_repo
        self._advisor = advisor
        self._generate_prediction = generate_prediction

    def execute(self, command: SendChatMessageCommand) -> ChatReply:
        """Run the chat use case.

        Args:
            command: The caller, their message and the session to continue.

        Returns:
            The assistant reply and the session it was stored in.

        Raises:
            ChatSessionNotFoundError: If ``session_id`` is unknown or owned
                by another user.
        """
        session = None
        if command.session_id is not None:
            session = self._session_repo.get_for_user(command.session_id, command.user_id)
            if session is None:
                raise ChatSessionNotFoundError(str(command.session_id))

        symbol = extract_symbol(command.message)
        logger.info(
            "Chat turn user=%s category=%s symbol=%s",
            command.user_id,
            command.category.value,
            symbol,
        )

        prediction = None
        try:
            if symbol and command.category is ChatCategory.STOCKS:
                report = self._generate_prediction.execute(
                    GeneratePredictionCommand(
                        user_id=command.user_id,
                        symbol=symbol,
                        query=command.message,
                    )
                )
                reply = report.analysis
                prediction = report.prediction
            else:
                reply = self._advisor.answer(command.message, command.category)
        except (AdvisorServiceError, MarketDataError) as exc:
            logger.warning("Advisor unavailable, replying with fallback: %s", exc.message)
            reply = FALLBACK_REPLY

        now = utcnow()
        turn = [
            ChatMessage(role=ChatRole.USER, content=command.message, timestamp=now),
            ChatMessage(role=ChatRole.ASSISTANT, content=reply, timestamp=now),
        ]

        if session is not None:
            self._session_repo.append_messages(session.id, turn, updated_at=now)
            session_id = session.id
        else:
            session = ChatSession(
                user_id=command.user_id,
                title=generate_session_title(command.message, command.category),
                category=command.category,
                messages=turn,
                created_at=now,
                updated_at=now,
            )
            self._session_repo.create(session)
            session_id = session.id

        return ChatReply(reply=reply, session_id=session_id, prediction=prediction)
