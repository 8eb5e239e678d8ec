"""
Dependency injection for the advisor bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the advisor context.
"""

from fastapi import Depends
from sqlalchemy.engine import Engine

from cryptofund.application.advisor.chat_sessions import (
    DeleteChatSessionUseCase,
    GetChatHistoryUseCase,
    GetChatSessionUseCase,
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
from cryptofund.domain.advisor.ports import MarketDataPort, StockAdvisorPort
from cryptofund.infrastructure.advisor.chat_session_repository import (
    ChatSessionRepositoryAdapter,
)
from cryptofund.infrastructure.advisor.finnhub_market_data import FinnhubMarketDataAdapter
from cryptofund.infrastructure.advisor.gemini_advisor import GeminiAdvisorAdapter
from cryptofund.infrastructure.advisor.market_repositories import (
    LearningFeedbackRepositoryAdapter,
    MarketSnapshotRepositoryAdapter,
    StockQuoteRepositoryAdapter,
)
from cryptofund.infrastructure.advisor.prediction_repository import (
    StockPredictionRepositoryAdapter,
)
from cryptofund.interfaces.dependencies import get_engine


def get_market_data() -> MarketDataPort:
    """Build the market data adapter from application settings."""
    return FinnhubMarketDataAdapter(
        api_key=settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout=settings.finnhub_timeout_seconds,
        synthetic_fallback=settings.synthetic_quote_fallback,
    )


def get_verification_market_data() -> MarketDataPort:
    """Build the market data adapter used to score predictions.

    A provider failure must leave the prediction unverified, so the
    synthetic fallback is always off here.
    """
    return FinnhubMarketDataAdapter(
        api_key=settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout=settings.finnhub_timeout_seconds,
        synthetic_fallback=False,
    )


def get_stock_advisor() -> StockAdvisorPort:
    """Build the Gemini advisor adapter from application settings."""
    return GeminiAdvisorAdapter(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        temperature=settings.gemini_temperature,
        max_output_tokens=settings.gemini_max_output_tokens,
        timeout=settings.gemini_timeout_seconds,
    )


def get_stock_quote_use_case(
    engine: Engine = Depends(get_engine),
    market_data: MarketDataPort = Depends(get_market_data),
) -> GetStockQuoteUseCase:
    """Build GetStockQuoteUseCase with its infrastructure dependencies."""
    return GetStockQuoteUseCase(
        market_data=market_data,
        quote_repo=StockQuoteRepositoryAdapter(engine),
        cache_minutes=settings.quote_cache_minutes,
    )


def get_trending_stocks_use_case(
    get_quote: GetStockQuoteUseCase = Depends(get_stock_quote_use_case),
) -> GetTrendingStocksUseCase:
    """Build GetTrendingStocksUseCase."""
    return GetTrendingStocksUseCase(get_quote=get_quote)


def get_market_overview_use_case(
    engine: Engine = Depends(get_engine),
) -> GetMarketOverviewUseCase:
    """Build GetMarketOverviewUseCase."""
    return GetMarketOverviewUseCase(snapshot_repo=MarketSnapshotRepositoryAdapter(engine))


def get_generate_prediction_use_case(
    engine: Engine = Depends(get_engine),
    advisor: StockAdvisorPort = Depends(get_stock_advisor),
    get_quote: GetStockQuoteUseCase = Depends(get_stock_quote_use_case),
) -> GeneratePredictionUseCase:
    """Build GeneratePredictionUseCase with its infrastructure dependencies."""
    return GeneratePredictionUseCase(
        prediction_repo=StockPredictionRepositoryAdapter(engine),
        advisor=advisor,
        get_quote=get_quote,
        history_limit=settings.prediction_history_limit,
    )


def get_send_chat_message_use_case(
    engine: Engine = Depends(get_engine),
    advisor: StockAdvisorPort = Depends(get_stock_advisor),
    generate_prediction: GeneratePredictionUseCase = Depends(
        get_generate_prediction_use_case
    ),
) -> SendChatMessageUseCase:
    """Build SendChatMessageUseCase with its infrastructure dependencies."""
    return SendChatMessageUseCase(
        session_repo=ChatSessionRepositoryAdapter(engine),
        advisor=advisor,
        generate_prediction=generate_prediction,
    )


def get_verify_predictions_use_case(
    engine: Engine = Depends(get_engine),
    market_data: MarketDataPort = Depends(get_verification_market_data),
) -> VerifyPredictionsUseCase:
    """Build VerifyPredictionsUseCase with its infrastructure dependencies."""
    return VerifyPredictionsUseCase(
        prediction_repo=StockPredictionRepositoryAdapter(engine),
        market_data=market_data,
    )


def get_symbol_predictions_use_case(
    engine: Engine = Depends(get_engine),
) -> GetSymbolPredictionsUseCase:
    return GetSymbolPredictionsUseCase(StockPredictionRepositoryAdapter(engine))


def get_user_predictions_use_case(
    engine: Engine = Depends(get_engine),
) -> GetUserPredictionsUseCase:
    return GetUserPredictionsUseCase(StockPredictionRepositoryAdapter(engine))


def get_prediction_use_case(
    engine: Engine = Depends(get_engine),
) -> GetPredictionUseCase:
    return GetPredictionUseCase(StockPredictionRepositoryAdapter(engine))


def get_submit_feedback_use_case(
    engine: Engine = Depends(get_engine),
) -> SubmitPredictionFeedbackUseCase:
    return SubmitPredictionFeedbackUseCase(
        prediction_repo=StockPredictionRepositoryAdapter(engine),
        feedback_repo=LearningFeedbackRepositoryAdapter(engine),
    )


def get_chat_history_use_case(
    engine: Engine = Depends(get_engine),
) -> GetChatHistoryUseCase:
    return GetChatHistoryUseCase(ChatSessionRepositoryAdapter(engine))


def get_chat_session_use_case(
    engine: Engine = Depends(get_engine),
) -> GetChatSessionUseCase:
    return GetChatSessionUseCase(ChatSessionRepositoryAdapter(engine))


def get_delete_chat_session_use_case(
    engine: Engine = Depends(get_engine),
) -> DeleteChatSessionUseCase:
    return DeleteChatSessionUseCase(ChatSessionRepositoryAdapter(engine))
