"""
Use cases: Admin dashboard reads and admin flag management.

Callers are expected to be admins; the interface layer enforces it.
"""

import logging
import math
from uuid import UUID

from cryptofund.application.funding.dtos import ListTransactionsQuery, TransactionPage
from cryptofund.domain.advisor.entities import utcnow
from cryptofund.domain.funding.entities import CampaignStatus, PlatformStats, User
from cryptofund.domain.funding.errors import UserNotFoundError
from cryptofund.domain.funding.ports import (
    CampaignRepository,
    TransactionRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)


class GetAdminStatsUseCase:
    """Computes the headline numbers shown on the admin dashboard."""

    def __init__(
        self,
        campaign_repo: CampaignRepository,
        user_repo: UserRepository,
        transaction_repo: TransactionRepository,
    ) -> None:
        self._campaign_repo = campaign_repo
        self._user_repo = user_repo
        self._transaction_repo = transaction_repo

    def execute(self) -> PlatformStats:
        """Return campaign, user, funds and today's transaction totals.

        "Today" starts at midnight UTC.
        """
        now = utcnow()
        midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return PlatformStats(
            total_campaigns=self._campaign_repo.count(),
            active_campaigns=self._campaign_repo.count(status=CampaignStatus.ACTIVE),
            total_users=self._user_repo.count(),
            total_funds_raised=self._campaign_repo.total_raised(),
            transactions_today=self._transaction_repo.count_since(midnight),
        )


class ListUsersUseCase:
    """Lists all users, newest first."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self) -> list[User]:
        return self._user_repo.list_all()


class SetAdminFlagUseCase:
    """Grants or revokes admin rights."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, user_id: UUID, is_admin: bool) -> User:
        """Set the flag and return the updated user.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        if not self._user_repo.set_admin(user_id, is_admin, updated_at=utcnow()):
            raise UserNotFoundError(str(user_id))
        logger.info("Set is_admin=%s for user id=%s", is_admin, user_id)
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user


class ListTransactionsUseCase:
    """Pages through the transaction ledger, newest first."""

    def __init__(self, transaction_repo: TransactionRepository) -> None:
        self._transaction_repo = transaction_repo

    def execute(self, query: ListTransactionsQuery) -> TransactionPage:
        total = self._transaction_repo.count(status=query.status)
        transactions = self._transaction_repo.list_page(
            status=query.status,
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )
        return TransactionPage(
            transactions=transactions,
            total_count=total,
            total_pages=math.ceil(total / query.limit),
            page=query.page,
        )
