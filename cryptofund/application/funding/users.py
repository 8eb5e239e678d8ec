"""
Use cases: Register users and manage their profiles.

RegisterUserUseCase
    Input: RegisterUserCommand
    Output: User
    Failure cases: EmailAlreadyRegisteredError.

GetUserUseCase / UpdateProfileUseCase
    Failure cases: UserNotFoundError.
"""

import logging
from dataclasses import replace
from uuid import UUID

from cryptofund.application.funding.dtos import RegisterUserCommand, UpdateProfileCommand
from cryptofund.domain.advisor.entities import utcnow
from cryptofund.domain.funding.entities import User
from cryptofund.domain.funding.errors import (
    EmailAlreadyRegisteredError,
    UserNotFoundError,
)
from cryptofund.domain.funding.ports import UserRepository

logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    """Creates an account for a new email address."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, command: RegisterUserCommand) -> User:
        """Register the user.

        Raises:
            EmailAlreadyRegisteredError: If the email already has an account.
        """
        email = command.email.strip().lower()
        if self._user_repo.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

        user = User(
            name=command.name.strip(),
            email=email,
            image=command.image,
            wallet_address=command.wallet_address,
        )
        self._user_repo.add(user)
        logger.info("Registered user id=%s", user.id)
        return user


class GetUserUseCase:
    """Fetches a user profile."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, user_id: UUID) -> User:
        user = self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user


class UpdateProfileUseCase:
    """Applies partial edits to the caller's profile."""

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def execute(self, command: UpdateProfileCommand) -> User:
        user = self._user_repo.get_by_id(command.user_id)
        if user is None:
            raise UserNotFoundError(str(command.user_id))

        changes = {
            key: value
            for key, value in (
                ("name", command.name),
                ("image", command.image),
                ("wallet_address", command.wallet_address),
            )
            if value is not None
        }
        updated = replace(user, **changes, updated_at=utcnow())
        self._user_repo.update(updated)
        logger.info("Updated profile of user id=%s fields=%s", user.id, sorted(changes))
        return updated
