"""
Domain entities for the advisor bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime.

    All timestamps are stored naive-in-UTC so that they compare
    consistently across database backends.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Direction(Enum):
    """Direction of a predicted or observed price move."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ChatRole(Enum):
    """Author of a chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatCategory(Enum):
    """Topic a chat session belongs to."""

    STOCKS = "stocks"
    FUNDING = "funding"


class Timeframe(Enum):
    """Requested prediction horizon."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def label(self) -> str:
        """Human-readable horizon stored on the prediction."""
        return {
            Timeframe.SHORT: "1 week",
            Timeframe.MEDIUM: "1 month",
            Timeframe.LONG: "3 months",
        }[self]


@dataclass(frozen=True)
class PredictionOutcome:
    """Result of comparing a prediction with the observed market.

    ``actual_price`` and ``actual_direction`` are absent when the outcome
    was recorded from user feedback rather than from a market price.
    """

    accuracy: float
    verified_at: datetime
    actual_price: Optional[float] = None
    actual_direction: Optional[Direction] = None


@dataclass
class StockPrediction:
    """An AI-generated forecast for a stock symbol."""

    user_id: UUID
    symbol: str
    initial_price: float
    predicted_price: float
    predicted_direction: Direction
    confidence: float
    timeframe: str
    ai_reasoning: str
    technical_factors: list[str] = field(default_factory=list)
    fundamental_factors: list[str] = field(default_factory=list)
    market_conditions: list[str] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    actual_outcome: Optional[PredictionOutcome] = None

    @property
    def is_verified(self) -> bool:
        """Return True once an outcome has been recorded."""
        return self.actual_outcome is not None


@dataclass(frozen=True)
class ChatMessage:
    """A single role-tagged message in a chat session."""

    role: ChatRole
    content: str
    timestamp: datetime = field(default_factory=utcnow)


@dataclass
class ChatSession:
    """An ordered conversation between a user and the advisor."""

    user_id: UUID
    title: str
    category: ChatCategory = ChatCategory.STOCKS
    messages: list[ChatMessage] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def preview(self) -> str:
        """First 60 characters of the latest message, for history listings."""
        if not self.messages:
            return ""
        return self.messages[-1].content[:60] + "..."


@dataclass(frozen=True)
class LearningFeedback:
    """A user's rating of how accurate a prediction turned out to be."""

    prediction_id: UUID
    user_id: UUID
    accuracy: float
    feedback: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class StockQuote:
    """A point-in-time quote for a listed stock."""

    symbol: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    open: float
    prev_close: float
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class IndexLevel:
    """Level and daily move of a major market index."""

    value: float
    change: float
    change_percent: float


@dataclass(frozen=True)
class SectorMove:
    """Daily move of a market sector."""

    change: float
    change_percent: float


@dataclass(frozen=True)
class MarketSnapshot:
    """Macro indicators, major indices and sector performance for a day."""

    date: datetime
    indicators: dict[str, float]
    major_indices: dict[str, IndexLevel]
    sector_performance: dict[str, SectorMove]


@dataclass(frozen=True)
class HistoricalExchange:
    """A past prediction replayed to the LLM as learning context."""

    user_message: str
    ai_response: str
    accuracy: Optional[float] = None
