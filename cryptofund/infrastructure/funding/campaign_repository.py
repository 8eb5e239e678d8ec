"""
Adapter: Campaign repository.

Implements CampaignRepository port against the campaigns table.
The raised total is never written here; it only moves through
ContributionRepositoryAdapter.record.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Engine, RowMapping

from cryptofund.domain.funding.entities import Campaign, CampaignStatus
from cryptofund.domain.funding.ports import CampaignRepository
from cryptofund.infrastructure.database import campaigns

logger = logging.getLogger(__name__)


def _to_entity(row: RowMapping) -> Campaign:
    return Campaign(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        goal=row["goal"],
        raised=row["raised"],
        deadline=row["deadline"],
        user_id=row["user_id"],
        user_name=row["user_name"],
        user_image=row["user_image"],
        image_url=row["image_url"],
        status=CampaignStatus(row["status"]),
        category=row["category"],
        on_chain_id=row["on_chain_id"],
        transaction_hash=row["transaction_hash"],
        claimed=row["claimed"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class CampaignRepositoryAdapter(CampaignRepository):
    """SQLAlchemy implementation of the campaign repository."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, campaign: Campaign) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                insert(campaigns).values(
                    id=campaign.id,
                    title=campaign.title,
                    description=campaign.description,
                    goal=campaign.goal,
                    raised=campaign.raised,
                    deadline=campaign.deadline,
                    user_id=campaign.user_id,
                    user_name=campaign.user_name,
                    user_image=campaign.user_image,
                    image_url=campaign.image_url,
                    status=campaign.status.value,
                    category=campaign.category,
                    on_chain_id=campaign.on_chain_id,
                    transaction_hash=campaign.transaction_hash,
                    claimed=campaign.claimed,
                    created_at=campaign.created_at,
                    updated_at=campaign.updated_at,
                )
            )

    def get_by_id(self, campaign_id: UUID) -> Optional[Campaign]:
        query = select(campaigns).where(campaigns.c.id == campaign_id)
        with self._engine.connect() as conn:
            row = conn.execute(query).mappings().first()
        return _to_entity(row) if row else None

    def search(
        self,
        category: Optional[str] = None,
        status: Optional[CampaignStatus] = None,
        limit: Optional[int] = None,
    ) -> list[Campaign]:
        query = select(campaigns).order_by(campaigns.c.created_at.desc())
        if category:
            query = query.where(campaigns.c.category == category)
        if status:
            query = query.where(campaigns.c.status == status.value)
        if limit:
            query = query.limit(limit)
        return self._fetch(query)

    def list_by_user(self, user_id: UUID) -> list[Campaign]:
        query = (
            select(campaigns)
            .where(campaigns.c.user_id == user_id)
            .order_by(campaigns.c.created_at.desc())
        )
        return self._fetch(query)

    def update(self, campaign: Campaign) -> None:
        with self._engine.begin() as conn:
            conn.execute(
                update(campaigns)
                .where(campaigns.c.id == campaign.id)
                .values(
                    title=campaign.title,
                    description=campaign.description,
                    image_url=campaign.image_url,
                    status=campaign.status.value,
                    updated_at=campaign.updated_at,
                )
            )

    def delete(self, campaign_id: UUID) -> bool:
        with self._engine.begin() as conn:
            return conn.execute(
                delete(campaigns).where(campaigns.c.id == campaign_id)
            ).rowcount == 1

    def count(self, status: Optional[CampaignStatus] = None) -> int:
        query = select(func.count()).select_from(campaigns)
        if status:
            query = query.where(campaigns.c.status == status.value)
        with self._engine.connect() as conn:
            return conn.execute(query).scalar_one()

    def total_raised(self) -> float:
        query = select(func.coalesce(func.sum(campaigns.c.raised), 0.0))
        with self._engine.connect() as conn:
            return float(conn.execute(query).scalar_one())

    def _fetch(self, query) -> list[Campaign]:
        with self._engine.connect() as conn:
            rows = conn.execute(query).mappings().all()
        return [_to_entity(row) for row in rows]
