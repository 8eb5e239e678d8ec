"""
Pydantic schemas for advisor API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from cryptofund.domain.advisor.entities import StockPrediction, StockQuote

SYMBOL_PATTERN = r"^[A-Za-z]{1,5}$"
MAX_MESSAGE_LENGTH = 4000


# ------------------------------------------------------------------
# Shared items
# ------------------------------------------------------------------


class QuoteItem(BaseModel):
    """A stock quote."""

    symbol: str
    price: float
    change: float
    change_percent: float
    high: float
    low: float
    open: float
    prev_close: float
    timestamp: datetime

    @classmethod
    def from_entity(cls, quote: StockQuote) -> "QuoteItem":
        return cls(
            symbol=quote.symbol,
            price=quote.price,
            change=quote.change,
            change_percent=quote.change_percent,
            high=quote.high,
            low=quote.low,
            open=quote.open,
            prev_close=quote.prev_close,
            timestamp=quote.timestamp,
        )


class PredictionOutcomeItem(BaseModel):
    """Verification result attached to a prediction."""

    accuracy: float
    verified_at: datetime
    actual_price: Optional[float] = None
    actual_direction: Optional[str] = None


class PredictionItem(BaseModel):
    """A stored stock prediction."""

    id: UUID
    user_id: UUID
    symbol: str
    initial_price: float
    predicted_price: float
    predicted_direction: str
    confidence: float
    timeframe: str
    ai_reasoning: str
    technical_factors: list[str]
    fundamental_factors: list[str]
    market_conditions: list[str]
    created_at: datetime
    actual_outcome: Optional[PredictionOutcomeItem] = None

    @classmethod
    def from_entity(cls, prediction: StockPrediction) -> "PredictionItem":
        outcome = prediction.actual_outcome
        return cls(
            id=prediction.id,
            user_id=prediction.user_id,
            symbol=prediction.symbol,
            initial_price=prediction.initial_price,
            predicted_price=prediction.predicted_price,
            predicted_direction=prediction.predicted_direction.value,
            confidence=prediction.confidence,
            timeframe=prediction.timeframe,
            ai_reasoning=prediction.ai_reasoning,
            technical_factors=prediction.technical_factors,
            fundamental_factors=prediction.fundamental_factors,
            market_conditions=prediction.market_conditions,
            created_at=prediction.created_at,
            actual_outcome=(
                PredictionOutcomeItem(
                    accuracy=outcome.accuracy,
                    verified_at=outcome.verified_at,
                    actual_price=outcome.actual_price,
                    actual_direction=(
                        outcome.actual_direction.value if outcome.actual_direction else None
                    ),
                )
                if outcome
                else None
            ),
        )


# ------------------------------------------------------------------
# Chat
# ------------------------------------------------------------------


class ChatRequest(BaseModel):
    """Request schema for one chat turn.

    Attributes:
        message: The user's message.
        session_id: Session to continue; omit to start a new one.
        category: Conversation topic.
    """

    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    session_id: Optional[UUID] = None
    category: Literal["stocks", "funding"] = "stocks"


class ChatResponse(BaseModel):
    """Response schema for one chat turn."""

    reply: str
    session_id: UUID
    prediction: Optional[PredictionItem] = None


class ChatHistoryEntry(BaseModel):
    """One session in the history listing."""

    id: UUID
    title: str
    preview: str
    timestamp: datetime


class ChatHistoryResponse(BaseModel):
    """Response schema for the chat history endpoint."""

    sessions: list[ChatHistoryEntry]


class ChatMessageItem(BaseModel):
    """A single message in a session."""

    role: str
    content: str
    timestamp: datetime


class ChatSessionResponse(BaseModel):
    """A full chat session."""

    id: UUID
    title: str
    category: str
    messages: list[ChatMessageItem]
    created_at: datetime
    updated_at: datetime


# ------------------------------------------------------------------
# Predictions
# ------------------------------------------------------------------


class GeneratePredictionRequest(BaseModel):
    """Request schema for an explicit prediction.

    Attributes:
        symbol: Ticker symbol, 1-5 letters.
        query: Optional question to steer the analysis.
        timeframe: Prediction horizon.
    """

    symbol: str = Field(..., pattern=SYMBOL_PATTERN, description="Stock ticker symbol")
    query: str = Field(default="", max_length=MAX_MESSAGE_LENGTH)
    timeframe: Literal["short", "medium", "long"] = "medium"


class PredictionReportResponse(BaseModel):
    """Response schema for a generated prediction."""

    prediction: PredictionItem
    analysis: str
    historical_accuracy: float
    quote: QuoteItem


class PredictionListResponse(BaseModel):
    """A list of predictions."""

    predictions: list[PredictionItem]


class FeedbackRequest(BaseModel):
    """Request schema for rating a prediction."""

    accuracy: float = Field(..., ge=0, le=100)
    feedback: str = Field(default="", max_length=2000)


class FeedbackResponse(BaseModel):
    """The stored feedback record."""

    id: UUID
    prediction_id: UUID
    accuracy: float
    feedback: str
    created_at: datetime


class VerifiedPredictionItem(BaseModel):
    """Outcome of verifying one prediction."""

    prediction_id: UUID
    symbol: str
    predicted_price: float
    actual_price: float
    predicted_direction: str
    actual_direction: str
    accuracy: float


class VerifyPredictionsResponse(BaseModel):
    """Response schema for a verification run."""

    verified_count: int
    results: list[VerifiedPredictionItem]
    failed_symbols: list[str]


# ------------------------------------------------------------------
# Market data
# ------------------------------------------------------------------


class TrendingStocksResponse(BaseModel):
    """Quotes for the trending symbols."""

    stocks: list[QuoteItem]


class IndexLevelItem(BaseModel):
    value: float
    change: float
    change_percent: float


class SectorMoveItem(BaseModel):
    change: float
    change_percent: float


class MarketOverviewResponse(BaseModel):
    """Macro indicators, major indices and sector performance."""

    date: datetime
    indicators: dict[str, float]
    major_indices: dict[str, IndexLevelItem]
    sector_performance: dict[str, SectorMoveItem]
