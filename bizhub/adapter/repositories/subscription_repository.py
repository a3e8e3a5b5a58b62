from typing import Optional
from uuid import UUID

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.subscription_repository import ISubscriptionRepository
from bizhub.app.services.entitlements import ENTITLED_STATUSES
from bizhub.domain.entities import Subscription


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel (read-only, billing owns the rows)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        return await self.session.get(Subscription, subscription_id)

    async def get_current_for_user(self, user_id: UUID) -> Optional[Subscription]:
        stmt = (
            select(Subscription)
            .where(
                Subscription.user_id == user_id,
                col(Subscription.status).in_(list(ENTITLED_STATUSES)),
            )
            .order_by(col(Subscription.starts_at).desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()
