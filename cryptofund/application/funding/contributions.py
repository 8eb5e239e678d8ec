"""
Use case: Contribute to a campaign, and list contributions.

ContributeUseCase
    Input: ContributeCommand (campaign_id, contributor, amount, transaction_hash)
    Output: Contribution
    Side effects: Records the contribution and a confirmed ledger
        transaction, and increments the campaign's raised total, in one
        database transaction.
    Failure cases: CampaignNotFoundError, CampaignNotActiveError,
        InvalidAmountError.
"""

import logging
from uuid import UUID

from cryptofund.application.funding.dtos import ContributeCommand
from cryptofund.domain.funding.entities import (
    CampaignStatus,
    Contribution,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from cryptofund.domain.funding.errors import (
    CampaignNotActiveError,
    CampaignNotFoundError,
    InvalidAmountError,
)
from cryptofund.domain.funding.ports import CampaignRepository, ContributionRepository

logger = logging.getLogger(__name__)


class ContributeUseCase:
    """Records a pledge toward an active campaign."""

    def __init__(
        self,
        campaign_repo: CampaignRepository,
        contribution_repo: ContributionRepository,
    ) -> None:
        self._campaign_repo = campaign_repo
        self._contribution_repo = contribution_repo

    def execute(self, command: ContributeCommand) -> Contribution:
        """Run the contribution use case.

        Args:
            command: Target campaign, contributor, amount and transfer hash.

        Returns:
            The recorded contribution.

        Raises:
            InvalidAmountError: If the amount is not positive.
            CampaignNotFoundError: If the campaign does not exist.
            CampaignNotActiveError: If the campaign is not accepting funds.
        """
        if command.amount <= 0:
            raise InvalidAmountError(command.amount)

        campaign = self._campaign_repo.get_by_id(command.campaign_id)
        if campaign is None:
            raise CampaignNotFoundError(str(command.campaign_id))
        if campaign.status is not CampaignStatus.ACTIVE:
            raise CampaignNotActiveError(str(campaign.id), campaign.status.value)

        contributor = command.contributor
        contribution = Contribution(
            campaign_id=campaign.id,
            campaign_title=campaign.title,
            user_id=contributor.id,
            user_name=contributor.name,
            user_image=contributor.image,
            amount=command.amount,
            transaction_hash=command.transaction_hash,
        )
        transaction = Transaction(
            type=TransactionType.CONTRIBUTION,
            campaign_id=campaign.id,
            campaign_title=campaign.title,
            user_id=contributor.id,
            user_name=contributor.name,
            amount=command.amount,
            transaction_hash=command.transaction_hash,
            status=TransactionStatus.CONFIRMED,
            timestamp=contribution.timestamp,
        )
        self._contribution_repo.record(contribution, transaction)

        logger.info(
            "Recorded contribution id=%s campaign=%s amount=%s",
            contribution.id,
            campaign.id,
            command.amount,
        )
        return contribution


class ListCampaignContributionsUseCase:
    """Lists contributions to a campaign, newest first."""

    def __init__(
        self,
        campaign_repo: CampaignRepository,
        contribution_repo: ContributionRepository,
    ) -> None:
        self._campaign_repo = campaign_repo
        self._contribution_repo = contribution_repo

    def execute(self, campaign_id: UUID) -> list[Contribution]:
        if self._campaign_repo.get_by_id(campaign_id) is None:
            raise CampaignNotFoundError(str(campaign_id))
        return self._contribution_repo.list_by_campaign(campaign_id)


class ListUserContributionsUseCase:
    """Lists contributions made by a user, newest first."""

    def __init__(self, contribution_repo: ContributionRepository) -> None:
        self._contribution_repo = contribution_repo

    def execute(self, user_id: UUID) -> list[Contribution]:
        return self._contribution_repo.list_by_user(user_id)
