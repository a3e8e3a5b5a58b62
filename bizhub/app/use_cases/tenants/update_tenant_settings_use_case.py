"""
Update Tenant Settings Use Case

Business name, logo, brand colors and free-form settings.
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.base import utcnow
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import AuditEvent, Principal
from bizhub.domain.errors import (
    InsufficientRoleError,
    InvalidBusinessNameError,
    NotAuthenticatedError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return

from .dtos import TenantInfo, UpdateTenantSettingsCommand


class UpdateTenantSettingsUseCase:
    """
    Use case for updating a tenant's presentation settings.

    Business Rules:
    - Requires the manage_settings capability (owner/admin by default)
    - settings keys are merged into the stored mapping
    - subdomain, owner and custom domain are not editable here
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        principal: Optional[Principal],
        tenant_id: UUID,
        command: UpdateTenantSettingsCommand,
    ) -> Result[TenantInfo]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            tenant, membership = context

            capabilities = resolve_capabilities(membership.role, membership.permissions)
            if Capability.manage_settings not in capabilities:
                return Return.err(
                    InsufficientRoleError("You cannot change this business's settings")
                )

            changed = []
            if command.business_name is not None:
                business_name = command.business_name.strip()
                if not business_name:
                    return Return.err(InvalidBusinessNameError())
                tenant.business_name = business_name
                changed.append("business_name")
            if command.logo_url is not None:
                tenant.logo_url = command.logo_url or None
                changed.append("logo_url")
            if command.brand_colors is not None:
                tenant.brand_colors = {**(tenant.brand_colors or {}), **command.brand_colors}
                changed.append("brand_colors")
            if command.settings is not None:
                tenant.settings = {**(tenant.settings or {}), **command.settings}
                changed.append("settings")

            if not changed:
                return Return.ok(TenantInfo.from_entity(tenant))

            tenant.updated_at = utcnow()
            tenant = await self.uow.tenants.update(tenant)

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=principal.id,
                    action="tenant_updated",
                    event_metadata={"fields": changed},
                )
            )
            await self.uow.commit()

            return Return.ok(TenantInfo.from_entity(tenant))
