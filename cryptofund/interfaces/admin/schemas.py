"""
Pydantic schemas for the admin dashboard API.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from cryptofund.domain.funding.entities import PlatformStats, Transaction
from cryptofund.interfaces.funding.schemas import UserResponse


class AdminStatsResponse(BaseModel):
    """Headline platform numbers."""

    total_campaigns: int
    active_campaigns: int
    total_users: int
    total_funds_raised: float
    transactions_today: int

    @classmethod
    def from_entity(cls, stats: PlatformStats) -> "AdminStatsResponse":
        return cls(
            total_campaigns=stats.total_campaigns,
            active_campaigns=stats.active_campaigns,
            total_users=stats.total_users,
            total_funds_raised=stats.total_funds_raised,
            transactions_today=stats.transactions_today,
        )


class UserListResponse(BaseModel):
    users: list[UserResponse]


class SetAdminFlagRequest(BaseModel):
    """Explicit flag value. When the body is omitted the flag is flipped."""

    is_admin: bool


class TransactionItem(BaseModel):
    """A ledger transaction."""

    id: UUID
    type: str
    campaign_id: UUID
    campaign_title: str
    user_id: UUID
    user_name: str
    amount: float
    transaction_hash: str
    status: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, tx: Transaction) -> "TransactionItem":
        return cls(
            id=tx.id,
            type=tx.type.value,
            campaign_id=tx.campaign_id,
            campaign_title=tx.campaign_title,
            user_id=tx.user_id,
            user_name=tx.user_name,
            amount=tx.amount,
            transaction_hash=tx.transaction_hash,
            status=tx.status.value,
            timestamp=tx.timestamp,
        )


class TransactionPageResponse(BaseModel):
    """One page of the transaction ledger.

    Attributes:
        transactions: Transactions on this page, newest first.
        total_count: Transactions matching the filter.
        total_pages: Pages at the requested page size.
        page: The page returned.
    """

    transactions: list[TransactionItem]
    total_count: int
    total_pages: int
    page: int
