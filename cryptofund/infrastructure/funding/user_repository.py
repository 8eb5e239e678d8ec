"""
Adapter: User repository.

Implements UserRepository port against the users table.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import func, insert, select, update
from sqlalchemy.engine import Engine, RowMapping

from cryptofund.domain.funding.entities import User
from cryptofund.domain.funding.ports import UserRepository
from cryptofund.infrastructure.database import users


def _to_entity(row: RowMapping) -> User:
    return User(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        image=row["image"],
        wallet_address=row["wallet_address"],
        is_admin=row["is_admin"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class UserRepositoryAdapter(UserRepository):
    """SQLAlchemy implementation of the user repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self._first(select(users).where(users.c.id == user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._first(select(users).where(users.c.email == email.lower()))

    def add(self, user: User) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(users).values(
                    id=user.id,
                    name=user.name,
                    email=user.email.lower(),
                    image=user.image,
                    wallet_address=user.wallet_address,
                    is_admin=user.is_admin,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
            )

    def update(self, user: User) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                update(users)
                .where(users.c.id == user.id)
                .values(
                    name=user.name,
                    image=user.image,
                    wallet_address=user.wallet_address,
                    updated_at=user.updated_at,
                )
            )

    def list_all(self) -> list[User]:
        query = select(users).order_by(users.c.created_at.desc())
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_entity(row) for row in rows]

    def set_admin(self, user_id: UUID, is_admin: bool, updated_at: datetime) -> bool:
        statement = (
            update(users)
            .where(users.c.id == user_id)
            .values(is_admin=is_admin, updated_at=updated_at)
        )
        with self._engine.begin() as conn:
            return conn.execute(statement).rowcount == 1

    def count(self) -> int:
        with self._engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(users)).scalar_one()

    def _first(self, query) -> Optional[User]:
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        return _to_entity(row) if row else None
