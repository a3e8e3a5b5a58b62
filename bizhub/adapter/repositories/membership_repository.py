from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.repositories.membership_repository import IMembershipRepository
from bizhub.domain.entities import Membership


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, membership_id: UUID) -> Optional[Membership]:
        """Get membership by ID"""
        stmt = select(Membership).where(Membership.id == membership_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_user_and_tenant(
        self, user_id: UUID, tenant_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and tenant"""
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.tenant_id == tenant_id
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_tenant_id(self, tenant_id: UUID) -> List[Membership]:
        """Get all memberships for a tenant, oldest first"""
        stmt = (
            select(Membership)
            .where(Membership.tenant_id == tenant_id)
            .order_by(col(Membership.created_at))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateKeyError(str(exc.orig)) from exc
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership
