"""
Use case: Verify matured predictions against the market.

Input: VerifyPredictionsCommand (min_age_hours, limit)
Output: VerificationReport
Side effects: Writes an outcome onto each verified prediction.
Failure cases: None. A symbol whose price cannot be fetched is logged
    and skipped; the remaining symbols are still processed.
"""

import logging
from collections import defaultdict
from datetime import timedelta

from cryptofund.application.advisor.dtos import (
    VerificationReport,
    VerifiedPrediction,
    VerifyPredictionsCommand,
)
from cryptofund.domain.advisor.accuracy import score_prediction
from cryptofund.domain.advisor.entities import PredictionOutcome, StockPrediction, utcnow
from cryptofund.domain.advisor.errors import MarketDataError
from cryptofund.domain.advisor.ports import MarketDataPort, StockPredictionRepository

logger = logging.getLogger(__name__)


class VerifyPredictionsUseCase:
    """Scores unverified predictions older than the minimum age.

    One price is fetched per symbol. Outcomes are written conditionally,
    so a prediction already verified by an overlapping run is skipped.
    """

    def __init__(
        self,
        prediction_repo: StockPredictionRepository,
        market_data: MarketDataPort,
    ) -> None:
        self._prediction_repo = prediction_repo
        self._market_data = market_data

    def execute(self, command: VerifyPredictionsCommand) -> VerificationReport:
        """Run the verification batch.

        Args:
            command: Minimum prediction age and batch size.

        Returns:
            Count and per-prediction results of the outcomes written.
        """
        cutoff = utcnow() - timedelta(hours=command.min_age_hours)
        pending = self._prediction_repo.list_unverified_before(cutoff, limit=command.limit)
        logger.info("Verifying %d predictions created before %s", len(pending), cutoff)

        by_symbol: dict[str, list[StockPrediction]] = defaultdict(list)
        for prediction in pending:
            by_symbol[prediction.symbol].append(prediction)

        results: list[VerifiedPrediction] = []
        failed: list[str] = []
        for symbol, predictions in by_symbol.items():
            try:
                quote = self._market_data.fetch_quote(symbol)
            except MarketDataError as exc:
                logger.error("Verification skipped for %s: %s", symbol, exc.reason)
                failed.append(symbol)
                continue

            for prediction in predictions:
                direction, accuracy = score_prediction(prediction, quote.price)
                outcome = PredictionOutcome(
                    accuracy=accuracy,
                    verified_at=utcnow(),
                    actual_price=quote.price,
                    actual_direction=direction,
                )
                if not self._prediction_repo.record_outcome(prediction.id, outcome):
                    logger.info("Prediction %s already verified, skipping", prediction.id)
                    continue
                results.append(
                    VerifiedPrediction(
                        prediction_id=prediction.id,
                        symbol=symbol,
                        predicted_price=prediction.predicted_price,
                        actual_price=quote.price,
                        predicted_direction=prediction.predicted_direction,
                        actual_direction=direction,
                        accuracy=accuracy,
                    )
                )

        logger.info("Verified %d predictions (%d symbols failed)", len(results), len(failed))
        return VerificationReport(
            verified_count=len(results),
            results=results,
            failed_symbols=failed,
        )
