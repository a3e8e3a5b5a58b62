"""
Membership Engine

Shared membership lookups. Every authorization decision starts from the
active membership returned by ``get_active_membership``; inactive or missing
memberships carry no role and no capabilities.
"""

import logging
from typing import FrozenSet, Optional, Tuple
from uuid import UUID

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.base import utcnow
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    Tenant,
    TenantStatus,
)
from bizhub.domain.errors import DuplicateOwnerError
from bizhub.libs.result import Result, Return

logger = logging.getLogger(__name__)


async def get_active_membership(
    uow: UnitOfWork, tenant_id: UUID, user_id: UUID
) -> Optional[Membership]:
    membership = await uow.memberships.get_by_user_and_tenant(user_id, tenant_id)
    if membership is None or membership.status != MembershipStatus.active:
        return None
    return membership


async def effective_role(
    uow: UnitOfWork, tenant_id: UUID, user_id: UUID
) -> Optional[MembershipRole]:
    """Role of the user's active membership, None if absent or inactive"""
    membership = await get_active_membership(uow, tenant_id, user_id)
    return membership.role if membership else None


async def effective_capabilities(
    uow: UnitOfWork, tenant_id: UUID, user_id: UUID
) -> FrozenSet[Capability]:
    membership = await get_active_membership(uow, tenant_id, user_id)
    if membership is None:
        return frozenset()
    return resolve_capabilities(membership.role, membership.permissions)


async def create_owner_membership(
    uow: UnitOfWork, tenant_id: UUID, owner_id: UUID
) -> Result[Membership]:
    """
    Create the tenant's single owner membership inside the caller's transaction.

    Does not commit. Fails with DuplicateOwnerError if the pair already has a
    membership or the tenant already has an owner.
    """
    existing = await uow.memberships.get_by_user_and_tenant(owner_id, tenant_id)
    if existing is not None:
        return Return.err(DuplicateOwnerError())

    memberships = await uow.memberships.get_by_tenant_id(tenant_id)
    if any(m.role == MembershipRole.owner for m in memberships):
        return Return.err(DuplicateOwnerError())

    now = utcnow()
    membership = Membership(
        tenant_id=tenant_id,
        user_id=owner_id,
        role=MembershipRole.owner,
        status=MembershipStatus.active,
        joined_at=now,
    )
    try:
        membership = await uow.memberships.create(membership)
    except DuplicateKeyError:
        logger.warning(f"Owner membership for tenant {tenant_id} already exists")
        return Return.err(DuplicateOwnerError())

    return Return.ok(membership)


async def load_member_context(
    uow: UnitOfWork, tenant_id: UUID, user_id: UUID
) -> Optional[Tuple[Tenant, Membership]]:
    """
    Tenant plus the user's active membership in it.

    None when the tenant is missing or cancelled, or the user is not an
    active member. Callers answer "not found" in every one of these cases so
    non-members cannot probe which tenants exist.
    """
    tenant = await uow.tenants.get_by_id(tenant_id)
    if tenant is None or tenant.status == TenantStatus.cancelled:
        return None
    membership = await get_active_membership(uow, tenant_id, user_id)
    if membership is None:
        return None
    return tenant, membership
