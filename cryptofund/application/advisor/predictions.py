"""
Use cases: Read stored predictions and collect user feedback on them.

Failure cases: PredictionNotFoundError for lookups by ID.
"""

import logging
from uuid import UUID

from cryptofund.application.advisor.dtos import SubmitFeedbackCommand
from cryptofund.domain.advisor.entities import (
    LearningFeedback,
    PredictionOutcome,
    StockPrediction,
    utcnow,
)
from cryptofund.domain.advisor.errors import PredictionNotFoundError
from cryptofund.domain.advisor.ports import (
    LearningFeedbackRepository,
    StockPredictionRepository,
)

logger = logging.getLogger(__name__)


class GetSymbolPredictionsUseCase:
    """Lists the most recent predictions for a symbol."""

    def __init__(self, prediction_repo: StockPredictionRepository) -> None:
        self._prediction_repo = prediction_repo

    def execute(self, symbol: str, limit: int = 10) -> list[StockPrediction]:
        symbol = symbol.strip().upper()
        logger.info("Listing predictions for symbol=%s, limit=%d", symbol, limit)
        return self._prediction_repo.list_by_symbol(symbol, limit=limit)


class GetUserPredictionsUseCase:
    """Lists every prediction requested by a user, newest first."""

    def __init__(self, prediction_repo: StockPredictionRepository) -> None:
        self._prediction_repo = prediction_repo

    def execute(self, user_id: UUID) -> list[StockPrediction]:
        return self._prediction_repo.list_by_user(user_id)


class GetPredictionUseCase:
    """Fetches a single prediction."""

    def __init__(self, prediction_repo: StockPredictionRepository) -> None:
        self._prediction_repo = prediction_repo

    def execute(self, prediction_id: UUID) -> StockPrediction:
        """Return the prediction or raise PredictionNotFoundError."""
        prediction = self._prediction_repo.get_by_id(prediction_id)
        if prediction is None:
            raise PredictionNotFoundError(str(prediction_id))
        return prediction


class SubmitPredictionFeedbackUseCase:
    """Stores a user's accuracy rating for a prediction.

    A rating on a prediction that has not been verified yet also stands in
    as its outcome, carrying only the accuracy and a timestamp.
    """

    def __init__(
        self,
        prediction_repo: StockPredictionRepository,
        feedback_repo: LearningFeedbackRepository,
    ) -> None:
        self._prediction_repo = prediction_repo
        self._feedback_repo = feedback_repo

    def execute(self, command: SubmitFeedbackCommand) -> LearningFeedback:
        """Run the feedback use case.

        Args:
            command: The prediction, the caller and their rating.

        Returns:
            The stored feedback record.

        Raises:
            PredictionNotFoundError: If the prediction does not exist.
        """
        prediction = self._prediction_repo.get_by_id(command.prediction_id)
        if prediction is None:
            raise PredictionNotFoundError(str(command.prediction_id))

        feedback = LearningFeedback(
            prediction_id=prediction.id,
            user_id=command.user_id,
            accuracy=command.accuracy,
            feedback=command.feedback,
        )
        self._feedback_repo.save(feedback)
        logger.info(
            "Feedback stored for prediction=%s accuracy=%.1f",
            prediction.id,
            command.accuracy,
        )

        if not prediction.is_verified:
            self._prediction_repo.record_outcome(
                prediction.id,
                PredictionOutcome(accuracy=command.accuracy, verified_at=utcnow()),
            )
        return feedback
