"""
Dependency injection for the funding bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
"""

from fastapi import Depends
from sqlalchemy.engine import Engine

from cryptofund.application.funding.admin import (
    GetAdminStatsUseCase,
    ListTransactionsUseCase,
    ListUsersUseCase,
    SetAdminFlagUseCase,
)
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
from cryptofund.application.funding.users import (
    GetUserUseCase,
    RegisterUserUseCase,
    UpdateProfileUseCase,
)
from cryptofund.infrastructure.funding.campaign_repository import CampaignRepositoryAdapter
from cryptofund.infrastructure.funding.ledger_repository import (
    ContributionRepositoryAdapter,
    TransactionRepositoryAdapter,
)
from cryptofund.infrastructure.funding.user_repository import UserRepositoryAdapter
from cryptofund.interfaces.dependencies import get_engine


# ------------------------------------------------------------------
# Users
# ------------------------------------------------------------------


def get_register_user_use_case(
    engine: Engine = Depends(get_engine),
) -> RegisterUserUseCase:
    """Build RegisterUserUseCase with its infrastructure dependencies."""
    return RegisterUserUseCase(user_repo=UserRepositoryAdapter(engine))


def get_user_use_case(engine: Engine = Depends(get_engine)) -> GetUserUseCase:
    return GetUserUseCase(user_repo=UserRepositoryAdapter(engine))


def get_update_profile_use_case(
    engine: Engine = Depends(get_engine),
) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(user_repo=UserRepositoryAdapter(engine))


# ------------------------------------------------------------------
# Campaigns
# ------------------------------------------------------------------


def get_create_campaign_use_case(
    engine: Engine = Depends(get_engine),
) -> CreateCampaignUseCase:
    """Build CreateCampaignUseCase with its infrastructure dependencies."""
    return CreateCampaignUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


def get_list_campaigns_use_case(
    engine: Engine = Depends(get_engine),
) -> ListCampaignsUseCase:
    return ListCampaignsUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


def get_campaign_use_case(engine: Engine = Depends(get_engine)) -> GetCampaignUseCase:
    return GetCampaignUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


def get_user_campaigns_use_case(
    engine: Engine = Depends(get_engine),
) -> ListUserCampaignsUseCase:
    return ListUserCampaignsUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


def get_update_campaign_use_case(
    engine: Engine = Depends(get_engine),
) -> UpdateCampaignUseCase:
    return UpdateCampaignUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


def get_delete_campaign_use_case(
    engine: Engine = Depends(get_engine),
) -> DeleteCampaignUseCase:
    return DeleteCampaignUseCase(campaign_repo=CampaignRepositoryAdapter(engine))


# ------------------------------------------------------------------
# Contributions
# ------------------------------------------------------------------


def get_contribute_use_case(engine: Engine = Depends(get_engine)) -> ContributeUseCase:
    """Build ContributeUseCase with its infrastructure dependencies."""
    return ContributeUseCase(
        campaign_repo=CampaignRepositoryAdapter(engine),
        contribution_repo=ContributionRepositoryAdapter(engine),
    )


def get_campaign_contributions_use_case(
    engine: Engine = Depends(get_engine),
) -> ListCampaignContributionsUseCase:
    return ListCampaignContributionsUseCase(
        campaign_repo=CampaignRepositoryAdapter(engine),
        contribution_repo=ContributionRepositoryAdapter(engine),
    )


def get_user_contributions_use_case(
    engine: Engine = Depends(get_engine),
) -> ListUserContributionsUseCase:
    return ListUserContributionsUseCase(
        contribution_repo=ContributionRepositoryAdapter(engine)
    )


# ------------------------------------------------------------------
# Admin
# ------------------------------------------------------------------


def get_admin_stats_use_case(
    engine: Engine = Depends(get_engine),
) -> GetAdminStatsUseCase:
    """Build GetAdminStatsUseCase with its infrastructure dependencies."""
    return GetAdminStatsUseCase(
        campaign_repo=CampaignRepositoryAdapter(engine),
        user_repo=UserRepositoryAdapter(engine),
        transaction_repo=TransactionRepositoryAdapter(engine),
    )


def get_list_users_use_case(engine: Engine = Depends(get_engine)) -> ListUsersUseCase:
    return ListUsersUseCase(user_repo=UserRepositoryAdapter(engine))


def get_set_admin_flag_use_case(
    engine: Engine = Depends(get_engine),
) -> SetAdminFlagUseCase:
    return SetAdminFlagUseCase(user_repo=UserRepositoryAdapter(engine))


def get_list_transactions_use_case(
    engine: Engine = Depends(get_engine),
) -> ListTransactionsUseCase:
    return ListTransactionsUseCase(transaction_repo=TransactionRepositoryAdapter(engine))
