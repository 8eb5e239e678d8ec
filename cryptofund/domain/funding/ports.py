"""
Port interfaces (ABCs) for the funding bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from cryptofund.domain.funding.entities import (
    Campaign,
    CampaignStatus,
    Contribution,
    Transaction,
    TransactionStatus,
    User,
)


class UserRepository(ABC):
    """Port for persisting and retrieving users."""

    @abstractmethod
    def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Return a user by ID, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Return a user by (lower-cased) email, or None."""
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user."""
        raise NotImplementedError

    @abstractmethod
    def update(self, user: User) -> None:
        """Persist profile changes of an existing user."""
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return all users, newest first."""
        raise NotImplementedError

    @abstractmethod
    def set_admin(self, user_id: UUID, is_admin: bool, updated_at: datetime) -> bool:
        """Set the admin flag. Returns False if the user does not exist."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        """Return the number of registered users."""
        raise NotImplementedError


class CampaignRepository(ABC):
    """Port for persisting and retrieving campaigns."""

    @abstractmethod
    def add(self, campaign: Campaign) -> None:
        """Persist a new campaign."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, campaign_id: UUID) -> Optional[Campaign]:
        """Return a campaign by ID, or None."""
        raise NotImplementedError

    @abstractmethod
    def search(
        self,
        category: Optional[str] = None,
        status: Optional[CampaignStatus] = None,
        limit: Optional[int] = None,
    ) -> list[Campaign]:
        """Return campaigns matching the filters, newest first."""
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> list[Campaign]:
        """Return campaigns created by a user, newest first."""
        raise NotImplementedError

    @abstractmethod
    def update(self, campaign: Campaign) -> None:
        """Persist editable fields of an existing campaign."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, campaign_id: UUID) -> bool:
        """Delete a campaign. Returns True if a row was removed."""
        raise NotImplementedError

    @abstractmethod
    def count(self, status: Optional[CampaignStatus] = None) -> int:
        """Return the number of campaigns, optionally filtered by status."""
        raise NotImplementedError

    @abstractmethod
    def total_raised(self) -> float:
        """Return the sum of ``raised`` over all campaigns."""
        raise NotImplementedError


class ContributionRepository(ABC):
    """Port for the contribution ledger."""

    @abstractmethod
    def record(self, contribution: Contribution, transaction: Transaction) -> None:
        """Store a contribution with its ledger transaction.

        The campaign's ``raised`` total is incremented by the contribution
        amount in the same database transaction.
        """
        raise NotImplementedError

    @abstractmethod
    def list_by_campaign(self, campaign_id: UUID) -> list[Contribution]:
        """Return contributions to a campaign, newest first."""
        raise NotImplementedError

    @abstractmethod
    def list_by_user(self, user_id: UUID) -> list[Contribution]:
        """Return contributions made by a user, newest first."""
        raise NotImplementedError


class TransactionRepository(ABC):
    """Port for reading the transaction ledger."""

    @abstractmethod
    def list_page(
        self,
        status: Optional[TransactionStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Transaction]:
        """Return one page of transactions, newest first."""
        raise NotImplementedError

    @abstractmethod
    def count(self, status: Optional[TransactionStatus] = None) -> int:
        """Return the number of transactions, optionally filtered by status."""
        raise NotImplementedError

    @abstractmethod
    def count_since(self, since: datetime) -> int:
        """Return the number of transactions recorded at or after ``since``."""
        raise NotImplementedError
