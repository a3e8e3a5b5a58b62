"""
Verify Custom Domain Use Case
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.domain_verification import (
    DomainVerificationService,
    IReachabilityProbe,
)
from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.base import utcnow
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import AuditEvent, Principal
from bizhub.domain.errors import (
    CustomDomainNotSetError,
    InsufficientRoleError,
    NotAuthenticatedError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return

from .dtos import DomainVerificationResponse


class VerifyCustomDomainUseCase:
    """
    Use case for verifying that a tenant's custom domain points at the platform.

    Business Rules:
    - Caller needs the manage_domain capability
    - A custom domain must be set
    - A reachable domain is marked verified; an unreachable one reports
      verified=false and leaves stored state untouched
    """

    def __init__(self, uow: UnitOfWork, probe: IReachabilityProbe):
        self.uow = uow
        self.probe = probe

    async def execute(
        self, principal: Optional[Principal], tenant_id: UUID
    ) -> Result[DomainVerificationResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            tenant, membership = context

            capabilities = resolve_capabilities(membership.role, membership.permissions)
            if Capability.manage_domain not in capabilities:
                return Return.err(InsufficientRoleError())

            domain = tenant.custom_domain
            if not domain:
                return Return.err(CustomDomainNotSetError())

            service = DomainVerificationService(self.uow.tenants, self.probe)
            if not await service.verify(domain):
                return Return.ok(DomainVerificationResponse(domain=domain, verified=False))

            if not tenant.domain_verified:
                tenant.domain_verified = True
                tenant.updated_at = utcnow()
                await self.uow.tenants.update(tenant)

                await self.uow.audit_events.create(
                    AuditEvent(
                        tenant_id=tenant.id,
                        user_id=principal.id,
                        action="custom_domain_verified",
                        event_metadata={"domain": domain},
                    )
                )

                await self.uow.commit()

            return Return.ok(DomainVerificationResponse(domain=domain, verified=True))
