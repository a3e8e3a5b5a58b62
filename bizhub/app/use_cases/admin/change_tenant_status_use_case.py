"""
Use Case: Change Tenant Status

Platform administration endpoint to suspend or restore a tenant, e.g. on
billing events. Authorised by the admin API key, not by a membership.
"""

import logging
from uuid import UUID

from bizhub.app.services.tenant_lifecycle import change_status
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.tenants.dtos import TenantStatusResponse
from bizhub.domain.entities import TenantStatus
from bizhub.domain.errors import TenantNotFoundError
from bizhub.libs.result import Result, Return

logger = logging.getLogger(__name__)


class ChangeTenantStatusUseCase:
    """
    Move a tenant between lifecycle states.

    Business Logic:
    1. Validate tenant exists
    2. Apply the transition (active <-> suspended, -> cancelled terminal)
    3. Create audit event (actor None: platform action)

    Idempotent: re-applying the current status succeeds without changes
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, tenant_id: UUID, new_status: TenantStatus
    ) -> Result[TenantStatusResponse]:
        async with self.uow:
            tenant = await self.uow.tenants.get_by_id(tenant_id)
            if tenant is None:
                return Return.err(TenantNotFoundError())

            result = await change_status(self.uow, tenant, new_status, actor_id=None)
            if result.is_err():
                return result

            await self.uow.commit()

            logger.info(f"Tenant {tenant_id} is now {new_status.value}")
            return Return.ok(
                TenantStatusResponse(id=str(tenant_id), status=new_status.value)
            )
