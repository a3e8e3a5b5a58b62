"""
List Members Use Case
"""

from typing import List, Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import Principal
from bizhub.domain.errors import NotAuthenticatedError, TenantNotFoundError
from bizhub.libs.result import Result, Return

from .dtos import MembershipInfo


class ListMembersUseCase:
    """Any active member can list the tenant's memberships, inactive ones included"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], tenant_id: UUID
    ) -> Result[List[MembershipInfo]]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())

            memberships = await self.uow.memberships.get_by_tenant_id(tenant_id)
            users = await self.uow.users.get_by_ids([m.user_id for m in memberships])
            emails = {user.id: user.email for user in users}

            return Return.ok(
                [MembershipInfo.from_entity(m, email=emails.get(m.user_id)) for m in memberships]
            )
