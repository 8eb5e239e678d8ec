"""
Caller identification.

Session issuance lives in the upstream gateway, which forwards the
authenticated user's ID in the ``X-User-Id`` header. These dependencies
resolve that ID to a stored user and enforce the admin flag.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.engine import Engine

from cryptofund.domain.funding.entities import User
from cryptofund.domain.funding.errors import NotAuthenticatedError, PermissionDeniedError
from cryptofund.infrastructure.funding.user_repository import UserRepositoryAdapter
from cryptofund.interfaces.dependencies import get_engine

USER_ID_HEADER = "X-User-Id"


def get_current_user(
    x_user_id: Optional[str] = Header(default=None, alias=USER_ID_HEADER),
    engine: Engine = Depends(get_engine),
) -> User:
    """Return the calling user.

    Raises:
        NotAuthenticatedError: If the header is missing, malformed or
            names an unknown user.
    """
    if not x_user_id:
        raise NotAuthenticatedError()
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise NotAuthenticatedError()

    user = UserRepositoryAdapter(engine).get_by_id(user_id)
    if user is None:
        raise NotAuthenticatedError()
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Return the calling user if they are an admin.

    Raises:
        PermissionDeniedError: If the caller is not an admin.
    """
    if not user.is_admin:
        raise PermissionDeniedError("admin access")
    return user
