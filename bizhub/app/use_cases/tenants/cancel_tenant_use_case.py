"""
Cancel Tenant Use Case

Soft retirement by the owner. The row stays; status becomes cancelled.
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.tenant_lifecycle import change_status
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import MembershipRole, Principal, TenantStatus
from bizhub.domain.errors import (
    InsufficientRoleError,
    NotAuthenticatedError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return

from .dtos import TenantStatusResponse


class CancelTenantUseCase:
    """
    Use case for cancelling a tenant.

    Business Rules:
    - Only the owner can cancel
    - Cancelled is terminal; the tenant no longer resolves
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], tenant_id: UUID
    ) -> Result[TenantStatusResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            tenant, membership = context

            if membership.role != MembershipRole.owner:
                return Return.err(
                    InsufficientRoleError("Only the owner can cancel the business")
                )

            result = await change_status(
                self.uow, tenant, TenantStatus.cancelled, principal.id
            )
            if result.is_err():
                return result

            await self.uow.commit()

            return Return.ok(
                TenantStatusResponse(id=str(tenant.id), status=TenantStatus.cancelled.value)
            )
