"""
Pydantic schemas for funding API request/response validation.

These schemas enforce input validation and define the API contract.
No business logic belongs here.
"""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl

from cryptofund.domain.funding.entities import Campaign, Contribution, User

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


class RegisterUserRequest(BaseModel):
    """Request schema for creating an account.

    Attributes:
        name: Display name.
        email: Contact email, unique per account.
        image: Optional avatar URL.
        wallet_address: Optional linked wallet.
    """

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    image: Optional[HttpUrl] = None
    wallet_address: Optional[str] = Field(default=None, max_length=100)


class UpdateProfileRequest(BaseModel):
    """Partial profile edit. Omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    image: Optional[HttpUrl] = None
    wallet_address: Optional[str] = Field(default=None, max_length=100)


class UserResponse(BaseModel):
    """A platform member."""

    id: UUID
    name: str
    email: str
    image: Optional[str] = None
    wallet_address: Optional[str] = None
    is_admin: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            image=user.image,
            wallet_address=user.wallet_address,
            is_admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


# ------------------------------------------------------------------
# Campaigns
# ------------------------------------------------------------------


class CreateCampaignRequest(BaseModel):
    """Request schema for launching a campaign.

    Attributes:
        title: Campaign title.
        description: Long-form description.
        goal: Funding goal, must be positive.
        duration_days: Days until the deadline.
        category: Free-form category label.
        image_url: Optional cover image.
        on_chain_id: Identifier of the campaign in the smart contract.
        transaction_hash: Hash of the creating transaction.
    """

    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=20, max_length=2000)
    goal: float = Field(..., gt=0)
    duration_days: int = Field(..., gt=0, le=365)
    category: str = Field(..., min_length=1, max_length=50)
    image_url: Optional[HttpUrl] = None
    on_chain_id: str = Field(..., min_length=1, max_length=100)
    transaction_hash: str = Field(..., min_length=1, max_length=100)


class UpdateCampaignRequest(BaseModel):
    """Partial campaign edit. Omitted fields are left unchanged."""

    title: Optional[str] = Field(default=None, min_length=5, max_length=100)
    description: Optional[str] = Field(default=None, min_length=20, max_length=2000)
    image_url: Optional[HttpUrl] = None
    status: Optional[Literal["active", "paused", "completed"]] = None


class CampaignResponse(BaseModel):
    """A fundraising campaign."""

    id: UUID
    title: str
    description: str
    goal: float
    raised: float
    deadline: int
    category: str
    image_url: Optional[str] = None
    status: str
    claimed: bool
    on_chain_id: str
    transaction_hash: str
    user_id: UUID
    user_name: str
    user_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, campaign: Campaign) -> "CampaignResponse":
        return cls(
            id=campaign.id,
            title=campaign.title,
            description=campaign.description,
            goal=campaign.goal,
            raised=campaign.raised,
            deadline=campaign.deadline,
            category=campaign.category,
            image_url=campaign.image_url,
            status=campaign.status.value,
            claimed=campaign.claimed,
            on_chain_id=campaign.on_chain_id,
            transaction_hash=campaign.transaction_hash,
            user_id=campaign.user_id,
            user_name=campaign.user_name,
            user_image=campaign.user_image,
            created_at=campaign.created_at,
            updated_at=campaign.updated_at,
        )


class CampaignListResponse(BaseModel):
    campaigns: list[CampaignResponse]


# ------------------------------------------------------------------
# Contributions
# ------------------------------------------------------------------


class ContributeRequest(BaseModel):
    """Request schema for pledging funds to a campaign."""

    amount: float = Field(..., gt=0)
    transaction_hash: str = Field(..., min_length=1, max_length=100)


class ContributionResponse(BaseModel):
    """A recorded pledge."""

    id: UUID
    campaign_id: UUID
    campaign_title: str
    user_id: UUID
    user_name: str
    user_image: Optional[str] = None
    amount: float
    transaction_hash: str
    timestamp: datetime

    @classmethod
    def from_entity(cls, contribution: Contribution) -> "ContributionResponse":
        return cls(
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


class ContributionListResponse(BaseModel):
    contributions: list[ContributionResponse]
