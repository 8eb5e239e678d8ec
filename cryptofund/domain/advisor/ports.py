"""
Port interfaces (ABCs) for the advisor bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    ChatMessage,
    ChatSession,
    HistoricalExchange,
    LearningFeedback,
    MarketSnapshot,
    PredictionOutcome,
    StockPrediction,
    StockQuote,
)


class StockPredictionRepository(ABC):
    """Port for persisting and querying stock predictions."""

    @abstractmethod
    def save(self, prediction: StockPrediction) -> None:
        """Persist a new prediction."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, prediction_id: UUID) -> Optional[StockPrediction]:
        """Return a prediction by its ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def list_by_symbol(self, symbol: str, limit: int = 10) -> list[StockPrediction]:
        """Return predictions for a symbol, newest first."""
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> list[StockPrediction]:
        """Return predictions requested by a user, newest first."""
        raise NotImplementedError

    @abstractmethod
    def list_verified(self, symbol: str, limit: int = 10) -> list[StockPrediction]:
        """Return predictions for a symbol that carry an outcome.

        Ordered by verification time, most recent first.
        """
        raise NotImplementedError

    @abstractmethod
    def list_unverified_before(
        self, cutoff: datetime, limit: int = 50
    ) -> list[StockPrediction]:
        """Return predictions without an outcome created before ``cutoff``."""
        raise NotImplementedError

    @abstractmethod
    def record_outcome(self, prediction_id: UUID, outcome: PredictionOutcome) -> bool:
        """Attach an outcome to a prediction that has none yet.

        Returns:
            True if the outcome was written, False if the prediction is
            missing or was already verified.
        """
        raise NotImplementedError


class ChatSessionRepository(ABC):
    """Port for persisting chat sessions."""

    @abstractmethod
    def create(self, session: ChatSession) -> None:
        """Persist a new chat session."""
        raise NotImplementedError

    @abstractmethod
    def get_for_user(self, session_id: UUID, user_id: UUID) -> Optional[ChatSession]:
        """Return a session only if it belongs to ``user_id``."""
        raise NotImplementedError

    @abstractmethod
    def append_messages(
        self, session_id: UUID, messages: list[ChatMessage], updated_at: datetime
    ) -> None:
        """Append messages to a session and bump its update time."""
        raise NotImplementedError

    @abstractmethod
    def list_for_user(
        self, user_id: UUID, category: ChatCategory, limit: int = 10
    ) -> list[ChatSession]:
        """Return a user's sessions in a category, most recently updated first."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, session_id: UUID, user_id: UUID) -> bool:
        """Delete a session owned by ``user_id``. Returns True if removed."""
        raise NotImplementedError


class LearningFeedbackRepository(ABC):
    """Port for persisting user feedback on predictions."""

    @abstractmethod
    def save(self, feedback: LearningFeedback) -> None:
        """Persist a feedback record."""
        raise NotImplementedError


class StockQuoteRepository(ABC):
    """Port for the quote cache."""

    @abstractmethod
    def get_fresh(self, symbol: str, since: datetime) -> Optional[StockQuote]:
        """Return the newest cached quote for ``symbol`` taken after ``since``."""
        raise NotImplementedError

    @abstractmethod
    def save(self, quote: StockQuote) -> None:
        """Store a freshly fetched quote."""
        raise NotImplementedError


class MarketSnapshotRepository(ABC):
    """Port for persisted market overview snapshots."""

    @abstractmethod
    def get_latest(self) -> Optional[MarketSnapshot]:
        """Return the most recent snapshot, or None."""
        raise NotImplementedError

    @abstractmethod
    def save(self, snapshot: MarketSnapshot) -> None:
        """Persist a snapshot."""
        raise NotImplementedError


class MarketDataPort(ABC):
    """Port for live market quotes."""

    @abstractmethod
    def fetch_quote(self, symbol: str) -> StockQuote:
        """Return the current quote for a symbol.

        Raises:
            MarketDataError: If no quote can be produced.
        """
        raise NotImplementedError


class StockAdvisorPort(ABC):
    """Port for the generative-AI stock advisor."""

    @abstractmethod
    def analyze_stock(
        self,
        symbol: str,
        user_query: str,
        quote: Optional[StockQuote],
        history: list[HistoricalExchange],
    ) -> str:
        """Return a free-text Markdown analysis of ``symbol``.

        Raises:
            AdvisorServiceError: If the provider call fails.
        """
        raise NotImplementedError

    @abstractmethod
    def answer(self, message: str, category: ChatCategory) -> str:
        """Return a general advisory reply for a message with no ticker.

        Raises:
            AdvisorServiceError: If the provider call fails.
        """
        raise NotImplementedError
