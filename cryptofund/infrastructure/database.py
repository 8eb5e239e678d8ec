"""
Database schema and engine factory.

Tables are declared with SQLAlchemy Core so the same schema runs on
PostgreSQL in production and SQLite in development and tests.
Document-shaped fields (factor lists, chat messages, snapshot maps)
are stored in JSON columns.
"""

import logging

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

metadata = MetaData()

# ------------------------------------------------------------------
# Funding
# ------------------------------------------------------------------

users = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("image", Text),
    Column("wallet_address", String(100)),
    Column("is_admin", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False, index=True),
    Column("updated_at", DateTime),
)

campaigns = Table(
    "campaigns",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("title", String(100), nullable=False),
    Column("description", Text, nullable=False),
    Column("goal", Float, nullable=False),
    Column("raised", Float, nullable=False, default=0.0),
    Column("deadline", BigInteger, nullable=False),
    Column("user_id", Uuid, ForeignKey("users.id"), nullable=False, index=True),
    Column("user_name", String(100), nullable=False),
    Column("user_image", Text),
    Column("image_url", Text),
    Column("status", String(20), nullable=False, index=True),
    Column("category", String(50), nullable=False, index=True),
    Column("on_chain_id", String(100), nullable=False),
    Column("transaction_hash", String(100), nullable=False),
    Column("claimed", Boolean, nullable=False, default=False),
    Column("created_at", DateTime, nullable=False, index=True),
    Column("updated_at", DateTime),
)

# Ledger rows keep campaign titles so they survive campaign deletion.
contributions = Table(
    "contributions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("campaign_id", Uuid, nullable=False, index=True),
    Column("campaign_title", String(100), nullable=False),
    Column("user_id", Uuid, nullable=False, index=True),
    Column("user_name", String(100), nullable=False),
    Column("user_image", Text),
    Column("amount", Float, nullable=False),
    Column("transaction_hash", String(100), nullable=False),
    Column("timestamp", DateTime, nullable=False, index=True),
)

transactions = Table(
    "transactions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("type", String(20), nullable=False),
    Column("campaign_id", Uuid, nullable=False, index=True),
    Column("campaign_title", String(100), nullable=False),
    Column("user_id", Uuid, nullable=False),
    Column("user_name", String(100), nullable=False),
    Column("amount", Float, nullable=False),
    Column("transaction_hash", String(100), nullable=False),
    Column("status", String(20), nullable=False, index=True),
    Column("timestamp", DateTime, nullable=False, index=True),
)

# ------------------------------------------------------------------
# Advisor
# ------------------------------------------------------------------

stock_predictions = Table(
    "stock_predictions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, nullable=False, index=True),
    Column("symbol", String(10), nullable=False, index=True),
    Column("initial_price", Float, nullable=False),
    Column("predicted_price", Float, nullable=False),
    Column("predicted_direction", String(10), nullable=False),
    Column("confidence", Float, nullable=False),
    Column("timeframe", String(20), nullable=False),
    Column("ai_reasoning", Text, nullable=False),
    Column("technical_factors", JSON, nullable=False),
    Column("fundamental_factors", JSON, nullable=False),
    Column("market_conditions", JSON, nullable=False),
    Column("created_at", DateTime, nullable=False, index=True),
    # Outcome, NULL until verified
    Column("actual_price", Float),
    Column("actual_direction", String(10)),
    Column("accuracy", Float),
    Column("verified_at", DateTime, index=True),
)

chat_sessions = Table(
    "chat_sessions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, nullable=False, index=True),
    Column("title", String(100), nullable=False),
    Column("category", String(20), nullable=False),
    Column("messages", JSON, nullable=False),
    Column("created_at", DateTime, nullable=False),
    Column("updated_at", DateTime, nullable=False, index=True),
)

learning_feedback = Table(
    "learning_feedback",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("prediction_id", Uuid, nullable=False, index=True),
    Column("user_id", Uuid, nullable=False),
    Column("accuracy", Float, nullable=False),
    Column("feedback", Text, nullable=False),
    Column("created_at", DateTime, nullable=False),
)

stock_quotes = Table(
    "stock_quotes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("symbol", String(10), nullable=False, index=True),
    Column("price", Float, nullable=False),
    Column("change", Float, nullable=False),
    Column("change_percent", Float, nullable=False),
    Column("high", Float, nullable=False),
    Column("low", Float, nullable=False),
    Column("open", Float, nullable=False),
    Column("prev_close", Float, nullable=False),
    Column("timestamp", DateTime, nullable=False, index=True),
)

market_snapshots = Table(
    "market_snapshots",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", DateTime, nullable=False, index=True),
    Column("indicators", JSON, nullable=False),
    Column("major_indices", JSON, nullable=False),
    Column("sector_performance", JSON, nullable=False),
)


def build_engine(database_url: str) -> Engine:
    """Build a SQLAlchemy engine for the configured database.

    In-memory SQLite databases share a single connection so that every
    session sees the same tables.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        A configured engine.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)


def create_tables(engine: Engine) -> None:
    """Create any missing tables."""
    metadata.create_all(engine)
    logger.info("Database schema ready (%d tables)", len(metadata.tables))
