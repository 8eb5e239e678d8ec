"""
Domain entities for the funding bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from cryptofund.domain.advisor.entities import utcnow


class CampaignStatus(Enum):
    """Lifecycle status of a campaign."""

    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    REFUNDED = "refunded"


class TransactionType(Enum):
    """Kind of on-chain movement recorded in the ledger."""

    CONTRIBUTION = "contribution"
    CLAIM = "claim"
    REFUND = "refund"


class TransactionStatus(Enum):
    """Confirmation state of a ledger transaction."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass
class User:
    """A platform member."""

    name: str
    email: str
    image: Optional[str] = None
    wallet_address: Optional[str] = None
    is_admin: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None


@dataclass
class Campaign:
    """A fundraising project with a goal, a deadline and a running total."""

    title: str
    description: str
    goal: float
    deadline: int
    user_id: UUID
    user_name: str
    category: str
    on_chain_id: str
    transaction_hash: str
    raised: float = 0.0
    user_image: Optional[str] = None
    image_url: Optional[str] = None
    status: CampaignStatus = CampaignStatus.ACTIVE
    claimed: bool = False
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def is_owned_by(self, user: User) -> bool:
        """Return True if ``user`` may edit or delete this campaign."""
        return self.user_id == user.id or user.is_admin


@dataclass(frozen=True)
class Contribution:
    """A pledge of funds by a user toward a campaign."""

    campaign_id: UUID
    campaign_title: str
    user_id: UUID
    user_name: str
    amount: float
    transaction_hash: str
    user_image: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class Transaction:
    """A ledger entry for a contribution, claim or refund."""

    type: TransactionType
    campaign_id: UUID
    campaign_title: str
    user_id: UUID
    user_name: str
    amount: float
    transaction_hash: str
    status: TransactionStatus = TransactionStatus.PENDING
    id: UUID = field(default_factory=uuid4)
    timestamp: datetime = field(default_factory=utcnow)


@dataclass(frozen=True)
class PlatformStats:
    """Headline numbers for the admin dashboard."""

    total_campaigns: int
    active_campaigns: int
    total_users: int
    total_funds_raised: float
    transactions_today: int
