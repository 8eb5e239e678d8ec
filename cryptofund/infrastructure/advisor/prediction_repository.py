"""
Adapter: Stock prediction repository.

Implements StockPredictionRepository port.
Persists predictions and their verification outcome in the
stock_predictions table.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, RowMapping

from cryptofund.domain.advisor.entities import (
    Direction,
    PredictionOutcome,
    StockPrediction,
)
from cryptofund.domain.advisor.ports import StockPredictionRepository
from cryptofund.infrastructure.database import stock_predictions

logger = logging.getLogger(__name__)


def _to_entity(row: RowMapping) -> StockPrediction:
    outcome = None
    if row["verified_at"] is not None:
        outcome = PredictionOutcome(
            accuracy=row["accuracy"],
            verified_at=row["verified_at"],
            actual_price=row["actual_price"],
            actual_direction=(
                Direction(row["actual_direction"]) if row["actual_direction"] else None
            ),
        )
    return StockPrediction(
        id=row["id"],
        user_id=row["user_id"],
        symbol=row["symbol"],
        initial_price=row["initial_price"],
        predicted_price=row["predicted_price"],
        predicted_direction=Direction(row["predicted_direction"]),
        confidence=row["confidence"],
        timeframe=row["timeframe"],
        ai_reasoning=row["ai_reasoning"],
        technical_factors=list(row["technical_factors"] or []),
        fundamental_factors=list(row["fundamental_factors"] or []),
        market_conditions=list(row["market_conditions"] or []),
        created_at=row["created_at"],
        actual_outcome=outcome,
    )


class StockPredictionRepositoryAdapter(StockPredictionRepository):
    """SQLAlchemy implementation of the prediction repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, prediction: StockPrediction) -> None:
        """Insert a new prediction row."""
        outcome = prediction.actual_outcome
        with self._engine.begin() as conn:
            conn.execute(
                insert(stock_predictions).values(
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
                    actual_price=outcome.actual_price if outcome else None,
                    actual_direction=(
                        outcome.actual_direction.value
                        if outcome and outcome.actual_direction
                        else None
                    ),
                    accuracy=outcome.accuracy if outcome else None,
                    verified_at=outcome.verified_at if outcome else None,
                )
            )

    def get_by_id(self, prediction_id: UUID) -> Optional[StockPrediction]:
        query = select(stock_predictions).where(stock_predictions.c.id == prediction_id)
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        return _to_entity(row) if row else None

    def list_by_symbol(self, symbol: str, limit: int = 10) -> list[StockPrediction]:
        query = (
            select(stock_predictions)
            .where(stock_predictions.c.symbol == symbol)
            .order_by(stock_predictions.c.created_at.desc())
            .limit(limit)
        )
        return self._fetch(query)

    def list_by_user(self, user_id: UUID) -> list[StockPrediction]:
        query = (
            select(stock_predictions)
            .where(stock_predictions.c.user_id == user_id)
            .order_by(stock_predictions.c.created_at.desc())
        )
        return self._fetch(query)

    def list_verified(self, symbol: str, limit: int = 10) -> list[StockPrediction]:
        query = (
            select(stock_predictions)
            .where(
                stock_predictions.c.symbol == symbol,
                stock_predictions.c.verified_at.is_not(None),
            )
            .order_by(stock_predictions.c.verified_at.desc())
            .limit(limit)
        )
        return self._fetch(query)

    def list_unverified_before(
        self, cutoff: datetime, limit: int = 50
    ) -> list[StockPrediction]:
        query = (
            select(stock_predictions)
            .where(
                stock_predictions.c.verified_at.is_(None),
                stock_predictions.c.created_at < cutoff,
            )
            .order_by(stock_predictions.c.created_at)
            .limit(limit)
        )
        return self._fetch(query)

    def record_outcome(self, prediction_id: UUID, outcome: PredictionOutcome) -> bool:
        """Write the outcome only if the prediction has none yet.

        Returns:
            True if a row was updated.
        """
        statement = (
            update(stock_predictions)
            .where(
                stock_predictions.c.id == prediction_id,
                stock_predictions.c.verified_at.is_(None),
            )
            .values(
                actual_price=outcome.actual_price,
                actual_direction=(
                    outcome.actual_direction.value if outcome.actual_direction else None
                ),
                accuracy=outcome.accuracy,
                verified_at=outcome.verified_at,
            )
        )
        with self._engine.begin() as conn:
            return conn.execute(statement).rowcount == 1

    def _fetch(self, query) -> list[StockPrediction]:
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_entity(row) for row in rows]
