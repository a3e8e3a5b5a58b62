from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.repositories.tenant_repository import ITenantRepository
from bizhub.domain.entities import Tenant, TenantStatus


class TenantRepository(ITenantRepository):
    """Tenant repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tenant_id: UUID) -> Optional[Tenant]:
        """Get tenant by ID"""
        return await self.session.get(Tenant, tenant_id)

    async def list_open_by_owner(self, owner_id: UUID) -> List[Tenant]:
        stmt = (
            select(Tenant)
            .where(Tenant.owner_id == owner_id, Tenant.status != TenantStatus.cancelled)
            .order_by(col(Tenant.created_at))
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        stmt = select(Tenant).where(Tenant.subdomain == subdomain)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_verified_custom_domain(self, domain: str) -> Optional[Tenant]:
        stmt = select(Tenant).where(
            Tenant.custom_domain == domain, col(Tenant.domain_verified).is_(True)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def subdomain_exists(self, subdomain: str) -> bool:
        stmt = select(Tenant.id).where(Tenant.subdomain == subdomain).limit(1)
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def find_ids_by_domain(self, domain: str) -> List[UUID]:
        stmt = select(Tenant.id).where(
            or_(Tenant.subdomain == domain, Tenant.custom_domain == domain)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, tenant: Tenant) -> Tenant:
        """Create a new tenant"""
        self.session.add(tenant)
        await self._flush()
        await self.session.refresh(tenant)
        return tenant

    async def update(self, tenant: Tenant) -> Tenant:
        """Update existing tenant"""
        self.session.add(tenant)
        await self._flush()
        await self.session.refresh(tenant)
        return tenant

    async def _flush(self):
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateKeyError(str(exc.orig)) from exc
