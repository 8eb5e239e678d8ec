"""
Use cases: Create, browse, edit and delete campaigns.

Editing and deleting are restricted to the campaign owner or an admin.

Failure cases: CampaignNotFoundError, PermissionDeniedError,
    InvalidCampaignStatusError, InvalidAmountError.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from uuid import UUID

from cryptofund.application.funding.dtos import (
    CreateCampaignCommand,
    ListCampaignsQuery,
    UpdateCampaignCommand,
)
from cryptofund.domain.advisor.entities import utcnow
from cryptofund.domain.funding.entities import Campaign, CampaignStatus, User
from cryptofund.domain.funding.errors import (
    CampaignNotFoundError,
    InvalidAmountError,
    InvalidCampaignStatusError,
    PermissionDeniedError,
)
from cryptofund.domain.funding.ports import CampaignRepository

logger = logging.getLogger(__name__)

EDITABLE_STATUSES = frozenset(
    {CampaignStatus.ACTIVE, CampaignStatus.PAUSED, CampaignStatus.COMPLETED}
)


def _load(campaign_repo: CampaignRepository, campaign_id: UUID) -> Campaign:
    campaign = campaign_repo.get_by_id(campaign_id)
    if campaign is None:
        raise CampaignNotFoundError(str(campaign_id))
    return campaign


class CreateCampaignUseCase:
    """Launches a campaign with a deadline ``duration_days`` from now."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, command: CreateCampaignCommand) -> Campaign:
        """Create the campaign.

        Args:
            command: Campaign fields and the owning user.

        Returns:
            The stored campaign, active with nothing raised.

        Raises:
            InvalidAmountError: If the goal is not positive.
        """
        if command.goal <= 0:
            raise InvalidAmountError(command.goal)

        now = utcnow()
        deadline = int(
            (datetime.now(timezone.utc) + timedelta(days=command.duration_days)).timestamp()
        )
        campaign = Campaign(
            title=command.title,
            description=command.description,
            goal=command.goal,
            deadline=deadline,
            user_id=command.owner.id,
            user_name=command.owner.name,
            user_image=command.owner.image,
            category=command.category,
            image_url=command.image_url,
            on_chain_id=command.on_chain_id,
            transaction_hash=command.transaction_hash,
            created_at=now,
        )
        self._campaign_repo.add(campaign)
        logger.info("Created campaign id=%s owner=%s", campaign.id, campaign.user_id)
        return campaign


class ListCampaignsUseCase:
    """Lists campaigns, newest first, with optional filters."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, query: ListCampaignsQuery) -> list[Campaign]:
        return self._campaign_repo.search(
            category=query.category,
            status=query.status,
            limit=query.limit,
        )


class GetCampaignUseCase:
    """Fetches one campaign."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, campaign_id: UUID) -> Campaign:
        return _load(self._campaign_repo, campaign_id)


class ListUserCampaignsUseCase:
    """Lists the campaigns a user has created."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, user_id: UUID) -> list[Campaign]:
        return self._campaign_repo.list_by_user(user_id)


class UpdateCampaignUseCase:
    """Applies partial edits to a campaign on behalf of its owner or an admin."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, command: UpdateCampaignCommand) -> Campaign:
        """Update the campaign.

        Raises:
            CampaignNotFoundError: If the campaign does not exist.
            PermissionDeniedError: If the actor neither owns it nor is admin.
            InvalidCampaignStatusError: If the status cannot be set by hand.
        """
        campaign = _load(self._campaign_repo, command.campaign_id)
        if not campaign.is_owned_by(command.actor):
            raise PermissionDeniedError("update campaign")
        if command.status is not None and command.status not in EDITABLE_STATUSES:
            raise InvalidCampaignStatusError(command.status.value)

        changes = {
            key: value
            for key, value in (
                ("title", command.title),
                ("description", command.description),
                ("image_url", command.image_url),
                ("status", command.status),
            )
            if value is not None
        }
        updated = replace(campaign, **changes, updated_at=utcnow())
        self._campaign_repo.update(updated)
        logger.info("Updated campaign id=%s fields=%s", campaign.id, sorted(changes))
        return updated


class DeleteCampaignUseCase:
    """Deletes a campaign on behalf of its owner or an admin."""

    def __init__(self, campaign_repo: CampaignRepository) -> None:
        self._campaign_repo = campaign_repo

    def execute(self, campaign_id: UUID, actor: User) -> None:
        campaign = _load(self._campaign_repo, campaign_id)
        if not campaign.is_owned_by(actor):
            raise PermissionDeniedError("delete campaign")
        self._campaign_repo.delete(campaign.id)
        logger.info("Deleted campaign id=%s by user=%s", campaign.id, actor.id)
