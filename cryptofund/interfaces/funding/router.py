"""
FastAPI router for the funding bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import HttpUrl

from cryptofund.application.funding.campaigns import (
    CreateCampaignUseCase,
    DeleteCampaignUseCase,
    GetCampaignUseCase,
    ListCampaignsUseCase,
    ListUserCampaignsUseCase,
    UpdateCampaignUseCase,
)
from cryptofund.application.funding.contributions import (
    ContributeUseCase,
    ListCampaignContributionsUseCase,
    ListUserContributionsUseCase,
)
from cryptofund.application.funding.dtos import (
    ContributeCommand,
    CreateCampaignCommand,
    ListCampaignsQuery,
    RegisterUserCommand,
    UpdateCampaignCommand,
    UpdateProfileCommand,
)
from cryptofund.application.funding.users import (
    GetUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from cryptofund.domain.funding.entities import CampaignStatus, User
from cryptofund.interfaces.auth import get_current_user
from cryptofund.interfaces.funding.dependencies import (
    get_campaign_contributions_use_case,
    get_campaign_use_case,
    get_contribute_use_case,
    get_create_campaign_use_case,
    get_delete_campaign_use_case,
    get_list_campaigns_use_case,
    get_register_user_use_case,
    get_update_campaign_use_case,
    get_update_profile_use_case,
    get_user_campaigns_use_case,
    get_user_contributions_use_case,
    get_user_use_case,
)
from cryptofund.interfaces.funding.schemas import (
    CampaignListResponse,
    CampaignResponse,
    ContributeRequest,
    ContributionListResponse,
    ContributionResponse,
    CreateCampaignRequest,
    RegisterUserRequest,
    UpdateCampaignRequest,
    UpdateProfileRequest,
    UserResponse,
)
from cryptofund.interfaces.schemas import ErrorResponse, ValidationErrorResponse

router = APIRouter(tags=["funding"])


def _url(value: Optional[HttpUrl]) -> Optional[str]:
    return str(value) if value is not None else None


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


@router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register a user",
)
def register_user(
    payload: RegisterUserRequest,
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
) -> UserResponse:
    """Create an account for a new email address."""
    user = use_case.execute(
        RegisterUserCommand(
            name=payload.name,
            email=payload.email,
            image=_url(payload.image),
            wallet_address=payload.wallet_address,
        )
    )
    return UserResponse.from_entity(user)


@router.get(
    "/users/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Get my profile",
)
def get_my_profile(
    user: User = Depends(get_current_user),
    use_case: GetUserUseCase = Depends(get_user_use_case),
) -> UserResponse:
    return UserResponse.from_entity(use_case.execute(user.id))


@router.patch(
    "/users/me",
    response_model=UserResponse,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Update my profile",
)
def update_my_profile(
    payload: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
) -> UserResponse:
    """Apply a partial profile edit for the caller."""
    updated = use_case.execute(
        UpdateProfileCommand(
            user_id=user.id,
            name=payload.name,
            image=_url(payload.image),
            wallet_address=payload.wallet_address,
        )
    )
    return UserResponse.from_entity(updated)


@router.get(
    "/users/{user_id}/campaigns",
    response_model=CampaignListResponse,
    summary="List a user's campaigns",
)
def list_user_campaigns(
    user_id: UUID,
    use_case: ListUserCampaignsUseCase = Depends(get_user_campaigns_use_case),
) -> CampaignListResponse:
    return CampaignListResponse(
        campaigns=[CampaignResponse.from_entity(c) for c in use_case.execute(user_id)]
    )


@router.get(
    "/users/{user_id}/contributions",
    response_model=ContributionListResponse,
    summary="List a user's contributions",
)
def list_user_contributions(
    user_id: UUID,
    use_case: ListUserContributionsUseCase = Depends(get_user_contributions_use_case),
) -> ContributionListResponse:
    return ContributionListResponse(
        contributions=[
            ContributionResponse.from_entity(c) for c in use_case.execute(user_id)
        ]
    )


# ------------------------------------------------------------------
# Campaigns
# ------------------------------------------------------------------


@router.get(
    "/campaigns",
    response_model=CampaignListResponse,
    responses={400: {"model": ValidationErrorResponse}},
    summary="Browse campaigns",
    description="List campaigns newest first, optionally filtered by category and status.",
)
def list_campaigns(
    category: Optional[str] = Query(default=None, max_length=50),
    campaign_status: Optional[Literal["active", "paused", "completed", "refunded"]] = Query(
        default=None, alias="status"
    ),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    use_case: ListCampaignsUseCase = Depends(get_list_campaigns_use_case),
) -> CampaignListResponse:
    campaigns = use_case.execute(
        ListCampaignsQuery(
            category=category,
            status=CampaignStatus(campaign_status) if campaign_status else None,
            limit=limit,
        )
    )
    return CampaignListResponse(
        campaigns=[CampaignResponse.from_entity(c) for c in campaigns]
    )


@router.post(
    "/campaigns",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Launch a campaign",
)
def create_campaign(
    payload: CreateCampaignRequest,
    user: User = Depends(get_current_user),
    use_case: CreateCampaignUseCase = Depends(get_create_campaign_use_case),
) -> CampaignResponse:
    """Create a campaign owned by the caller."""
    campaign = use_case.execute(
        CreateCampaignCommand(
            owner=user,
            title=payload.title,
            description=payload.description,
            goal=payload.goal,
            duration_days=payload.duration_days,
            category=payload.category,
            on_chain_id=payload.on_chain_id,
            transaction_hash=payload.transaction_hash,
            image_url=_url(payload.image_url),
        )
    )
    return CampaignResponse.from_entity(campaign)


@router.get(
    "/campaigns/{campaign_id}",
    response_model=CampaignResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get a campaign",
)
def get_campaign(
    campaign_id: UUID,
    use_case: GetCampaignUseCase = Depends(get_campaign_use_case),
) -> CampaignResponse:
    return CampaignResponse.from_entity(use_case.execute(campaign_id))


@router.patch(
    "/campaigns/{campaign_id}",
    response_model=CampaignResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Edit a campaign",
    description="Owner or admin only.",
)
def update_campaign(
    campaign_id: UUID,
    payload: UpdateCampaignRequest,
    user: User = Depends(get_current_user),
    use_case: UpdateCampaignUseCase = Depends(get_update_campaign_use_case),
) -> CampaignResponse:
    campaign = use_case.execute(
        UpdateCampaignCommand(
            campaign_id=campaign_id,
            actor=user,
            title=payload.title,
            description=payload.description,
            image_url=_url(payload.image_url),
            status=CampaignStatus(payload.status) if payload.status else None,
        )
    )
    return CampaignResponse.from_entity(campaign)


@router.delete(
    "/campaigns/{campaign_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete a campaign",
    description="Owner or admin only.",
)
def delete_campaign(
    campaign_id: UUID,
    user: User = Depends(get_current_user),
    use_case: DeleteCampaignUseCase = Depends(get_delete_campaign_use_case),
) -> None:
    use_case.execute(campaign_id, user)


# ------------------------------------------------------------------
# Contributions
# ------------------------------------------------------------------


@router.post(
    "/campaigns/{campaign_id}/contribute",
    response_model=ContributionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Contribute to a campaign",
    description=(
        "Record a pledge and its ledger transaction and add the amount to the "
        "campaign's running total."
    ),
)
def contribute(
    campaign_id: UUID,
    payload: ContributeRequest,
    user: User = Depends(get_current_user),
    use_case: ContributeUseCase = Depends(get_contribute_use_case),
) -> ContributionResponse:
    """Record the caller's contribution."""
    contribution = use_case.execute(
        ContributeCommand(
            campaign_id=campaign_id,
            contributor=user,
            amount=payload.amount,
            transaction_hash=payload.transaction_hash,
        )
    )
    return ContributionResponse.from_entity(contribution)


@router.get(
    "/campaigns/{campaign_id}/contributions",
    response_model=ContributionListResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List a campaign's contributions",
)
def list_campaign_contributions(
    campaign_id: UUID,
    use_case: ListCampaignContributionsUseCase = Depends(
        get_campaign_contributions_use_case
    ),
) -> ContributionListResponse:
    return ContributionListResponse(
        contributions=[
            ContributionResponse.from_entity(c) for c in use_case.execute(campaign_id)
        ]
    )
