"""
Adapter: Contribution and transaction ledger.

Implements ContributionRepository and TransactionRepository ports.
A contribution, its transaction row and the campaign's raised
increment are written in a single database transaction.
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Engine, RowMapping

from cryptofund.domain.funding.entities import (
    Contribution,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from cryptofund.domain.funding.ports import ContributionRepository, TransactionRepository
from cryptofund.infrastructure.database import campaigns, contributions, transactions

logger = logging.getLogger(__name__)


def _contribution(row: RowMapping) -> Contribution:
    return Contribution(
        id=row["id"],
        campaign_id=row["campaign_id"],
        campaign_title=row["campaign_title"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        user_image=row["user_image"],
        amount=row["amount"],
        transaction_hash=row["transaction_hash"],
        timestamp=row["timestamp"],
    )


def _transaction(row: RowMapping) -> Transaction:
    return Transaction(
        id=row["id"],
        type=TransactionType(row["type"]),
        campaign_id=row["campaign_id"],
        campaign_title=row["campaign_title"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        amount=row["amount"],
        transaction_hash=row["transaction_hash"],
        status=TransactionStatus(row["status"]),
        timestamp=row["timestamp"],
    )


class ContributionRepositoryAdapter(ContributionRepository):
    """SQLAlchemy implementation of the contribution ledger."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def record(self, contribution: Contribution, transaction: Transaction) -> None:
        """Insert both ledger rows and bump ``raised`` atomically."""
        with self._engine.begin() as conn:
            conn.execute(
                insert(contributions).values(
                    id=contribution.id,
                    campaign_id=contribution.campaign_id,
                    campaign_title=contribution.campaign_title,
                    user_id=contribution.user_id,
                    user_name=contribution.user_name,
                    user_image=contribution.user_image,
                    amount=contribution.amount,
                    transaction_hash=contribution.transaction_hash,
                    timestamp=contribution.timestamp,
                )
            )
            conn.execute(
                insert(transactions).values(
                    id=transaction.id,
                    type=transaction.type.value,
                    campaign_id=transaction.campaign_id,
                    campaign_title=transaction.campaign_title,
                    user_id=transaction.user_id,
                    user_name=transaction.user_name,
                    amount=transaction.amount,
                    transaction_hash=transaction.transaction_hash,
                    status=transaction.status.value,
                    timestamp=transaction.timestamp,
                )
            )
            conn.execute(
                update(campaigns)
                .where(campaigns.c.id == contribution.campaign_id)
                .values(raised=campaigns.c.raised + contribution.amount)
            )

    def list_by_campaign(self, campaign_id: UUID) -> list[Contribution]:
        query = (
            select(contributions)
            .where(contributions.c.campaign_id == campaign_id)
            .order_by(contributions.c.timestamp.desc())
        )
        return self._fetch(query)

    def list_by_user(self, user_id: UUID) -> list[Contribution]:
        query = (
            select(contributions)
            .where(contributions.c.user_id == user_id)
            .order_by(contributions.c.timestamp.desc())
        )
        return self._fetch(query)

    def _fetch(self, query) -> list[Contribution]:
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_contribution(row) for row in rows]


class TransactionRepositoryAdapter(TransactionRepository):
    """Read side of the transaction ledger."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list_page(
        self,
        status: Optional[TransactionStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Transaction]:
        query = select(transactions).order_by(transactions.c.timestamp.desc())
        if status:
            query = query.where(transactions.c.status == status.value)
        query = query.offset(offset).limit(limit)
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_transaction(row) for row in rows]

    def count(self, status: Optional[TransactionStatus] = None) -> int:
        query = select(func.count()).select_from(transactions)
        if status:
            query = query.where(transactions.c.status == status.value)
        with self._engine.connect() as conn:
            return conn.execute(query).scalar_one()

    def count_since(self, since: datetime) -> int:
        query = (
            select(func.count())
            .select_from(transactions)
            .where(transactions.c.timestamp >= since)
        )
        with self._engine.connect() as conn:
            return conn.execute(query).scalar_one()
