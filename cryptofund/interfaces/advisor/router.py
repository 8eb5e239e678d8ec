"""
FastAPI router for the advisor bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from cryptofund.application.advisor.chat_sessions import (
    DeleteChatSessionUseCase,
    GetChatHistoryUseCase,
    GetChatSessionUseCase,
)
from cryptofund.application.advisor.dtos import (
    GeneratePredictionCommand,
    SendChatMessageCommand,
    SubmitFeedbackCommand,
    VerifyPredictionsCommand,
)
from cryptofund.application.advisor.generate_prediction import GeneratePredictionUseCase
from cryptofund.application.advisor.market_data import (
    GetMarketOverviewUseCase,
    GetStockQuoteUseCase,
    GetTrendingStocksUseCase,
)
from cryptofund.application.advisor.predictions import (
    GetPredictionUseCase,
    GetSymbolPredictionsUseCase,
    GetUserPredictionsUseCase,
    SubmitPredictionFeedbackUseCase,
)
from cryptofund.application.advisor.send_chat_message import SendChatMessageUseCase
from cryptofund.application.advisor.verify_predictions import VerifyPredictionsUseCase
from cryptofund.core.config import settings
from cryptofund.domain.advisor.entities import ChatCategory, Timeframe
from cryptofund.domain.funding.entities import User
from cryptofund.interfaces.advisor.dependencies import (
    get_chat_history_use_case,
    get_chat_session_use_case,
    get_delete_chat_session_use_case,
    get_generate_prediction_use_case,
    get_market_overview_use_case,
    get_prediction_use_case,
    get_send_chat_message_use_case,
    get_stock_quote_use_case,
    get_submit_feedback_use_case,
    get_symbol_predictions_use_case,
    get_trending_stocks_use_case,
    get_user_predictions_use_case,
    get_verify_predictions_use_case,
)
from cryptofund.interfaces.advisor.schemas import (
    SYMBOL_PATTERN,
    ChatHistoryEntry,
    ChatHistoryResponse,
    ChatMessageItem,
    ChatRequest,
    ChatResponse,
    ChatSessionResponse,
    FeedbackRequest,
    FeedbackResponse,
    GeneratePredictionRequest,
    IndexLevelItem,
    MarketOverviewResponse,
    PredictionItem,
    PredictionListResponse,
    PredictionReportResponse,
    QuoteItem,
    SectorMoveItem,
    TrendingStocksResponse,
    VerifiedPredictionItem,
    VerifyPredictionsResponse,
)
from cryptofund.interfaces.auth import get_current_user, require_admin
from cryptofund.interfaces.schemas import ErrorResponse, ValidationErrorResponse
from cryptofund.shared.security.rate_limiting import HEAVY_RATE_LIMIT, limiter

router = APIRouter(prefix="/stocks", tags=["advisor"])


# ------------------------------------------------------------------
# Chat
# ------------------------------------------------------------------


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Send a chat message",
    description=(
        "Answer a message from the stock advisor. Messages naming a ticker "
        "produce a stored prediction."
    ),
)
@limiter.limit(HEAVY_RATE_LIMIT)
def send_chat_message(
    request: Request,
    payload: ChatRequest,
    user: User = Depends(get_current_user),
    use_case: SendChatMessageUseCase = Depends(get_send_chat_message_use_case),
) -> ChatResponse:
    """Run one chat turn for the caller."""
    result = use_case.execute(
        SendChatMessageCommand(
            user_id=user.id,
            message=payload.message,
            session_id=payload.session_id,
            category=ChatCategory(payload.category),
        )
    )
    return ChatResponse(
        reply=result.reply,
        session_id=result.session_id,
        prediction=(
            PredictionItem.from_entity(result.prediction) if result.prediction else None
        ),
    )


@router.get(
    "/chat/history",
    response_model=ChatHistoryResponse,
    responses={401: {"model": ErrorResponse}},
    summary="List chat sessions",
)
def get_chat_history(
    limit: int = Query(default=10, ge=1, le=50),
    user: User = Depends(get_current_user),
    use_case: GetChatHistoryUseCase = Depends(get_chat_history_use_case),
) -> ChatHistoryResponse:
    """List the caller's most recent stock chat sessions."""
    items = use_case.execute(user.id, limit=limit)
    return ChatHistoryResponse(
        sessions=[
            ChatHistoryEntry(
                id=item.id,
                title=item.title,
                preview=item.preview,
                timestamp=item.timestamp,
            )
            for item in items
        ]
    )


@router.get(
    "/chat/sessions/{session_id}",
    response_model=ChatSessionResponse,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get a chat session",
)
def get_chat_session(
    session_id: UUID,
    user: User = Depends(get_current_user),
    use_case: GetChatSessionUseCase = Depends(get_chat_session_use_case),
) -> ChatSessionResponse:
    """Return one of the caller's sessions with all messages."""
    session = use_case.execute(user.id, session_id)
    return ChatSessionResponse(
        id=session.id,
        title=session.title,
        category=session.category.value,
        messages=[
            ChatMessageItem(role=m.role.value, content=m.content, timestamp=m.timestamp)
            for m in session.messages
        ],
        created_at=session.created_at,
        updated_at=session.updated_at,
    )


@router.delete(
    "/chat/sessions/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={401: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Delete a chat session",
)
def delete_chat_session(
    session_id: UUID,
    user: User = Depends(get_current_user),
    use_case: DeleteChatSessionUseCase = Depends(get_delete_chat_session_use_case),
) -> None:
    """Delete one of the caller's sessions."""
    use_case.execute(user.id, session_id)


# ------------------------------------------------------------------
# Predictions
# ------------------------------------------------------------------


@router.get(
    "/predictions",
    response_model=PredictionListResponse,
    responses={400: {"model": ValidationErrorResponse}},
    summary="List predictions for a symbol",
)
def list_symbol_predictions(
    symbol: str = Query(..., pattern=SYMBOL_PATTERN),
    limit: int = Query(default=10, ge=1, le=100),
    use_case: GetSymbolPredictionsUseCase = Depends(get_symbol_predictions_use_case),
) -> PredictionListResponse:
    """Return the most recent predictions for a symbol."""
    predictions = use_case.execute(symbol, limit=limit)
    return PredictionListResponse(
        predictions=[PredictionItem.from_entity(p) for p in predictions]
    )


@router.post(
    "/predictions",
    response_model=PredictionReportResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
    summary="Generate a prediction",
    description="Ask the AI advisor for an analysis of a symbol and store the prediction.",
)
@limiter.limit(HEAVY_RATE_LIMIT)
def generate_prediction(
    request: Request,
    payload: GeneratePredictionRequest,
    user: User = Depends(get_current_user),
    use_case: GeneratePredictionUseCase = Depends(get_generate_prediction_use_case),
) -> PredictionReportResponse:
    """Generate and store a prediction for the caller."""
    report = use_case.execute(
        GeneratePredictionCommand(
            user_id=user.id,
            symbol=payload.symbol,
            query=payload.query,
            timeframe=Timeframe(payload.timeframe),
        )
    )
    return PredictionReportResponse(
        prediction=PredictionItem.from_entity(report.prediction),
        analysis=report.analysis,
        historical_accuracy=report.historical_accuracy,
        quote=QuoteItem.from_entity(report.quote),
    )


@router.get(
    "/predictions/mine",
    response_model=PredictionListResponse,
    responses={401: {"model": ErrorResponse}},
    summary="List my predictions",
)
def list_my_predictions(
    user: User = Depends(get_current_user),
    use_case: GetUserPredictionsUseCase = Depends(get_user_predictions_use_case),
) -> PredictionListResponse:
    """Return every prediction the caller requested."""
    predictions = use_case.execute(user.id)
    return PredictionListResponse(
        predictions=[PredictionItem.from_entity(p) for p in predictions]
    )


@router.post(
    "/predictions/verify",
    response_model=VerifyPredictionsResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Verify matured predictions",
    description="Score unverified predictions against current market prices. Admin only.",
)
def verify_predictions(
    _admin: User = Depends(require_admin),
    use_case: VerifyPredictionsUseCase = Depends(get_verify_predictions_use_case),
) -> VerifyPredictionsResponse:
    """Run one verification batch."""
    report = use_case.execute(
        VerifyPredictionsCommand(
            min_age_hours=settings.verification_min_age_hours,
            limit=settings.verification_batch_limit,
        )
    )
    return VerifyPredictionsResponse(
        verified_count=report.verified_count,
        results=[
            VerifiedPredictionItem(
                prediction_id=r.prediction_id,
                symbol=r.symbol,
                predicted_price=r.predicted_price,
                actual_price=r.actual_price,
                predicted_direction=r.predicted_direction.value,
                actual_direction=r.actual_direction.value,
                accuracy=r.accuracy,
            )
            for r in report.results
        ],
        failed_symbols=report.failed_symbols,
    )


@router.get(
    "/predictions/{prediction_id}",
    response_model=PredictionItem,
    responses={404: {"model": ErrorResponse}},
    summary="Get a prediction",
)
def get_prediction(
    prediction_id: UUID,
    use_case: GetPredictionUseCase = Depends(get_prediction_use_case),
) -> PredictionItem:
    """Return a single prediction."""
    return PredictionItem.from_entity(use_case.execute(prediction_id))


@router.post(
    "/predictions/{prediction_id}/feedback",
    response_model=FeedbackResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Rate a prediction",
)
def submit_prediction_feedback(
    prediction_id: UUID,
    payload: FeedbackRequest,
    user: User = Depends(get_current_user),
    use_case: SubmitPredictionFeedbackUseCase = Depends(get_submit_feedback_use_case),
) -> FeedbackResponse:
    """Store the caller's accuracy rating for a prediction."""
    feedback = use_case.execute(
        SubmitFeedbackCommand(
            prediction_id=prediction_id,
            user_id=user.id,
            accuracy=payload.accuracy,
            feedback=payload.feedback,
        )
    )
    return FeedbackResponse(
        id=feedback.id,
        prediction_id=feedback.prediction_id,
        accuracy=feedback.accuracy,
        feedback=feedback.feedback,
        created_at=feedback.created_at,
    )


# ------------------------------------------------------------------
# Market data
# ------------------------------------------------------------------


@router.get(
    "/quotes/{symbol}",
    response_model=QuoteItem,
    responses={400: {"model": ValidationErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Get a stock quote",
)
def get_stock_quote(
    symbol: str,
    use_case: GetStockQuoteUseCase = Depends(get_stock_quote_use_case),
) -> QuoteItem:
    """Return a quote, served from cache while fresh."""
    return QuoteItem.from_entity(use_case.execute(symbol))


@router.get(
    "/trending",
    response_model=TrendingStocksResponse,
    summary="Trending stocks",
)
def get_trending_stocks(
    use_case: GetTrendingStocksUseCase = Depends(get_trending_stocks_use_case),
) -> TrendingStocksResponse:
    """Return quotes for the trending symbols."""
    return TrendingStocksResponse(
        stocks=[QuoteItem.from_entity(q) for q in use_case.execute()]
    )


@router.get(
    "/market-data",
    response_model=MarketOverviewResponse,
    summary="Market overview",
)
def get_market_overview(
    use_case: GetMarketOverviewUseCase = Depends(get_market_overview_use_case),
) -> MarketOverviewResponse:
    """Return macro indicators, major indices and sector performance."""
    snapshot = use_case.execute()
    return MarketOverviewResponse(
        date=snapshot.date,
        indicators=snapshot.indicators,
        major_indices={
            name: IndexLevelItem(
                value=level.value,
                change=level.change,
                change_percent=level.change_percent,
            )
            for name, level in snapshot.major_indices.items()
        },
        sector_performance={
            name: SectorMoveItem(change=move.change, change_percent=move.change_percent)
            for name, move in snapshot.sector_performance.items()
        },
    )
