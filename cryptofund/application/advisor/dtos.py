"""
Data Transfer Objects for the advisor application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import UUID

from cryptofund.domain.advisor.entities import (
    ChatCategory,
    Direction,
    StockPrediction,
    StockQuote,
    Timeframe,
)


# ------------------------------------------------------------------
# Chat DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class SendChatMessageCommand:
    """Input DTO for one chat turn.

    Attributes:
        user_id: The caller.
        message: Free-text message, never empty.
        session_id: Existing session to continue, or None to start one.
        category: Topic of the conversation.
    """

    user_id: UUID
    message: str
    session_id: Optional[UUID] = None
    category: ChatCategory = ChatCategory.STOCKS


@dataclass(frozen=True)
class ChatReply:
    """Output DTO for a chat turn.

    Attributes:
        reply: Assistant message text.
        session_id: Session the turn was stored in.
        prediction: Prediction stored during this turn, if a ticker was found.
    """

    reply: str
    session_id: UUID
    prediction: Optional[StockPrediction] = None


@dataclass(frozen=True)
class ChatHistoryItem:
    """One row of a user's chat history listing."""

    id: UUID
    title: str
    preview: str
    timestamp: datetime


# ------------------------------------------------------------------
# Prediction DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class GeneratePredictionCommand:
    """Input DTO for requesting an AI analysis of a symbol.

    Attributes:
        user_id: The caller the prediction is attributed to.
        symbol: Stock ticker symbol.
        query: Optional free-text question that accompanies the request.
        timeframe: Prediction horizon.
    """

    user_id: UUID
    symbol: str
    query: str = ""
    timeframe: Timeframe = Timeframe.MEDIUM


@dataclass(frozen=True)
class PredictionReport:
    """Output DTO for a generated prediction.

    Attributes:
        prediction: The stored prediction.
        analysis: Normalized Markdown analysis returned by the model.
        historical_accuracy: Mean accuracy of past verified predictions
            for the symbol (0 when none).
        quote: Quote the prediction was anchored to.
    """

    prediction: StockPrediction
    analysis: str
    historical_accuracy: float
    quote: StockQuote


@dataclass(frozen=True)
class SubmitFeedbackCommand:
    """Input DTO for rating a prediction.

    Attributes:
        prediction_id: Prediction being rated.
        user_id: The caller.
        accuracy: Perceived accuracy on a 0-100 scale.
        feedback: Free-text comment.
    """

    prediction_id: UUID
    user_id: UUID
    accuracy: float
    feedback: str = ""


# ------------------------------------------------------------------
# Verification DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class VerifyPredictionsCommand:
    """Input DTO for a verification run.

    Attributes:
        min_age_hours: Only predictions older than this are verified.
        limit: Maximum number of predictions processed per run.
    """

    min_age_hours: int = 24
    limit: int = 50


@dataclass(frozen=True)
class VerifiedPrediction:
    """Outcome of verifying a single prediction."""

    prediction_id: UUID
    symbol: str
    predicted_price: float
    actual_price: float
    predicted_direction: Direction
    actual_direction: Direction
    accuracy: float


@dataclass(frozen=True)
class VerificationReport:
    """Output DTO for a verification run.

    Attributes:
        verified_count: Number of outcomes written.
        results: One entry per verified prediction.
        failed_symbols: Symbols whose price could not be fetched.
    """

    verified_count: int
    results: list[VerifiedPrediction] = field(default_factory=list)
    failed_symbols: list[str] = field(default_factory=list)
