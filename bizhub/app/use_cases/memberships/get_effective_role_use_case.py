"""
Get Effective Role Use Case
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.memberships import effective_capabilities, effective_role
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import Principal
from bizhub.domain.errors import NotAuthenticatedError
from bizhub.libs.result import Result, Return

from .dtos import EffectiveRoleResponse


class GetEffectiveRoleUseCase:
    """
    Role and capabilities of the caller in a tenant.

    Non-members (and inactive members) get role None and no capabilities,
    never an error.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], tenant_id: UUID
    ) -> Result[EffectiveRoleResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            role = await effective_role(self.uow, tenant_id, principal.id)
            capabilities = await effective_capabilities(self.uow, tenant_id, principal.id)

            return Return.ok(
                EffectiveRoleResponse(
                    tenant_id=str(tenant_id),
                    role=role.value if role else None,
                    capabilities=sorted(c.value for c in capabilities),
                )
            )
