"""
Use case: Generate an AI analysis and stored prediction for a symbol.

Input: GeneratePredictionCommand (user_id, symbol, query, timeframe)
Output: PredictionReport
Side effects: Caches the quote; persists one StockPrediction.
Failure cases: MarketDataError, AdvisorServiceError.
"""

import logging

from cryptofund.application.advisor.dtos import (
    GeneratePredictionCommand,
    PredictionReport,
)
from cryptofund.application.advisor.market_data import GetStockQuoteUseCase
from cryptofund.domain.advisor.accuracy import historical_accuracy
from cryptofund.domain.advisor.entities import HistoricalExchange, StockPrediction
from cryptofund.domain.advisor.ports import StockAdvisorPort, StockPredictionRepository
from cryptofund.domain.advisor.prediction_parser import parse_analysis

logger = logging.getLogger(__name__)

PROMPT_HISTORY_LIMIT = 5


class GeneratePredictionUseCase:
    """Orchestrates one LLM-backed prediction.

    Anchors the analysis to the current quote, replays recently verified
    predictions for the same symbol as learning context, then scrapes
    direction, confidence, price target and factors from the reply.
    """

    def __init__(
        self,
        prediction_repo: StockPredictionRepository,
        advisor: StockAdvisorPort,
        get_quote: GetStockQuoteUseCase,
        history_limit: int = 10,
    ) -> None:
        self._prediction_repo = prediction_repo
        self._advisor = advisor
        self._get_quote = get_quote
        self._history_limit = history_limit

    def execute(self, command: GeneratePredictionCommand) -> PredictionReport:
        """Run the prediction use case.

        Args:
            command: Symbol, caller, optional question and horizon.

        Returns:
            The stored prediction with the analysis text it was parsed from.

        Raises:
            MarketDataError: If no quote can be obtained.
            AdvisorServiceError: If the model call fails.
        """
        symbol = command.symbol.strip().upper()
        logger.info(
            "Generating prediction for symbol=%s, timeframe=%s",
            symbol,
            command.timeframe.value,
        )

        quote = self._get_quote.execute(symbol)

        verified = self._prediction_repo.list_verified(symbol, limit=self._history_limit)
        past_accuracy = historical_accuracy(
            p.actual_outcome.accuracy for p in verified if p.actual_outcome
        )
        history = [
            HistoricalExchange(
                user_message=(
                    f"Predict the stock {p.symbol} with initial price "
                    f"{p.initial_price} and timeframe {p.timeframe}."
                ),
                ai_response=(
                    f"Predicted {p.predicted_direction.value} with price target "
                    f"{p.predicted_price}."
                ),
                accuracy=p.actual_outcome.accuracy if p.actual_outcome else None,
            )
            for p in verified[:PROMPT_HISTORY_LIMIT]
        ]

        raw = self._advisor.analyze_stock(
            symbol=symbol,
            user_query=command.query or f"Analyze {symbol} stock",
            quote=quote,
            history=history,
        )
        parsed = parse_analysis(raw, quote.price)

        prediction = StockPrediction(
            user_id=command.user_id,
            symbol=symbol,
            initial_price=quote.price,
            predicted_price=parsed.predicted_price,
            predicted_direction=parsed.direction,
            confidence=parsed.confidence,
            timeframe=command.timeframe.label,
            ai_reasoning=parsed.analysis,
            technical_factors=parsed.technical_factors,
            fundamental_factors=parsed.fundamental_factors,
            market_conditions=parsed.market_conditions,
        )
        self._prediction_repo.save(prediction)

        logger.info(
            "Stored prediction id=%s symbol=%s direction=%s confidence=%.2f",
            prediction.id,
            symbol,
            prediction.predicted_direction.value,
            prediction.confidence,
        )
        return PredictionReport(
            prediction=prediction,
            analysis=parsed.analysis,
            historical_accuracy=past_accuracy,
            quote=quote,
        )
