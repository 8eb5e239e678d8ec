"""
Adapter: Quote cache, market snapshot and learning feedback repositories.

Implements StockQuoteRepository, MarketSnapshotRepository and
LearningFeedbackRepository ports.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine

from cryptofund.domain.advisor.entities import (
    IndexLevel,
    LearningFeedback,
    MarketSnapshot,
    SectorMove,
    StockQuote,
)
from cryptofund.domain.advisor.ports import (
    LearningFeedbackRepository,
    MarketSnapshotRepository,
    StockQuoteRepository,
)
from cryptofund.infrastructure.database import (
    learning_feedback,
    market_snapshots,
    stock_quotes,
)

logger = logging.getLogger(__name__)


class StockQuoteRepositoryAdapter(StockQuoteRepository):
    """Stores fetched quotes; the newest row per symbol serves as the cache."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_fresh(self, symbol: str, since: datetime) -> Optional[StockQuote]:
        query = (
            select(stock_quotes)
            .where(stock_quotes.c.symbol == symbol, stock_quotes.c.timestamp >= since)
            .order_by(stock_quotes.c.timestamp.desc())
            .limit(1)
        )
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        if row is None:
            return None
        return StockQuote(
            symbol=row["symbol"],
            price=row["price"],
            change=row["change"],
            change_percent=row["change_percent"],
            high=row["high"],
            low=row["low"],
            open=row["open"],
            prev_close=row["prev_close"],
            timestamp=row["timestamp"],
        )

    def save(self, quote: StockQuote) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(stock_quotes).values(
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
            )


class MarketSnapshotRepositoryAdapter(MarketSnapshotRepository):
    """Stores daily market overviews with their maps as JSON."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_latest(self) -> Optional[MarketSnapshot]:
        query = select(market_snapshots).order_by(market_snapshots.c.date.desc()).limit(1)
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        if row is None:
            return None
        return MarketSnapshot(
            date=row["date"],
            indicators=dict(row["indicators"]),
            major_indices={
                name: IndexLevel(**level) for name, level in row["major_indices"].items()
            },
            sector_performance={
                name: SectorMove(**move)
                for name, move in row["sector_performance"].items()
            },
        )

    def save(self, snapshot: MarketSnapshot) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(market_snapshots).values(
                    date=snapshot.date,
                    indicators=snapshot.indicators,
                    major_indices={
                        name: {
                            "value": level.value,
                            "change": level.change,
                            "change_percent": level.change_percent,
                        }
                        for name, level in snapshot.major_indices.items()
                    },
                    sector_performance={
                        name: {"change": move.change, "change_percent": move.change_percent}
                        for name, move in snapshot.sector_performance.items()
                    },
                )
            )


class LearningFeedbackRepositoryAdapter(LearningFeedbackRepository):
    """Appends user feedback rows."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def save(self, feedback: LearningFeedback) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(learning_feedback).values(
                    id=feedback.id,
                    prediction_id=feedback.prediction_id,
                    user_id=feedback.user_id,
                    accuracy=feedback.accuracy,
                    feedback=feedback.feedback,
                    created_at=feedback.created_at,
                )
            )
