"""
Data Transfer Objects for the funding application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from cryptofund.domain.funding.entities import (
    CampaignStatus,
    Transaction,
    TransactionStatus,
    User,
)


# ------------------------------------------------------------------
# User DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class RegisterUserCommand:
    """Input DTO for creating an account.

    Attributes:
        name: Display name, at least two characters.
        email: Contact email; stored lower-cased and unique.
        image: Optional avatar URL.
        wallet_address: Optional linked wallet.
    """

    name: str
    email: str
    image: Optional[str] = None
    wallet_address: Optional[str] = None


@dataclass(frozen=True)
class UpdateProfileCommand:
    """Input DTO for profile edits. ``None`` leaves a field unchanged."""

    user_id: UUID
    name: Optional[str] = None
    image: Optional[str] = None
    wallet_address: Optional[str] = None


# ------------------------------------------------------------------
# Campaign DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class CreateCampaignCommand:
    """Input DTO for launching a campaign.

    Attributes:
        owner: The user creating the campaign.
        title: Campaign title.
        description: Long-form description.
        goal: Funding goal, positive.
        duration_days: Days from now until the deadline.
        category: Free-form category label.
        on_chain_id: Identifier of the campaign in the smart contract.
        transaction_hash: Hash of the creating transaction.
        image_url: Optional cover image.
    """

    owner: User
    title: str
    description: str
    goal: float
    duration_days: int
    category: str
    on_chain_id: str
    transaction_hash: str
    image_url: Optional[str] = None


@dataclass(frozen=True)
class ListCampaignsQuery:
    """Filters for the campaign listing."""

    category: Optional[str] = None
    status: Optional[CampaignStatus] = None
    limit: Optional[int] = None


@dataclass(frozen=True)
class UpdateCampaignCommand:
    """Input DTO for editing a campaign. ``None`` leaves a field unchanged."""

    campaign_id: UUID
    actor: User
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[CampaignStatus] = None


# ------------------------------------------------------------------
# Contribution DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ContributeCommand:
    """Input DTO for pledging funds.

    Attributes:
        campaign_id: Campaign receiving the funds.
        contributor: The user contributing.
        amount: Amount pledged, positive.
        transaction_hash: Hash of the on-chain transfer.
    """

    campaign_id: UUID
    contributor: User
    amount: float
    transaction_hash: str


# ------------------------------------------------------------------
# Admin DTOs
# ------------------------------------------------------------------


@dataclass(frozen=True)
class ListTransactionsQuery:
    """Pagination and filtering for the transaction ledger.

    Attributes:
        page: 1-based page number.
        limit: Page size.
        status: Only transactions in this status, or all when None.
    """

    page: int = 1
    limit: int = 10
    status: Optional[TransactionStatus] = None


@dataclass(frozen=True)
class TransactionPage:
    """One page of the transaction ledger."""

    transactions: list[Transaction]
    total_count: int
    total_pages: int
    page: int
