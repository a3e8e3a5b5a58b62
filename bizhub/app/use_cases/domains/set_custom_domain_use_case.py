"""
Set Custom Domain Use Case

Attaches, replaces or clears a tenant's custom domain.
"""

import logging
from typing import Optional
from uuid import UUID

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.domain_verification import (
    DomainVerificationService,
    is_valid_domain,
    normalize_domain,
)
from bizhub.app.services.entitlements import FEATURE_CUSTOM_DOMAIN, is_feature_enabled
from bizhub.app.services.host_policy import HostKind, HostPolicy
from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.tenants.dtos import TenantInfo
from bizhub.domain.base import utcnow
from bizhub.domain.capabilities import Capability, resolve_capabilities
from bizhub.domain.entities import AuditEvent, Principal
from bizhub.domain.errors import (
    DomainUnavailableError,
    FeatureNotEnabledError,
    InsufficientRoleError,
    InvalidDomainError,
    NotAuthenticatedError,
    TenantNotFoundError,
)
from bizhub.libs.result import Result, Return

logger = logging.getLogger(__name__)


class SetCustomDomainUseCase:
    """
    Use case for setting a tenant's custom domain.

    Business Rules:
    - Caller needs the manage_domain capability
    - Platform hosts (default hosts, the platform domain and its subdomains)
      are never custom domains
    - Setting a domain requires the custom_domain plan feature; clearing does not
    - The domain must not be used by another tenant
    - A changed domain starts unverified; the same domain keeps its verification
    """

    def __init__(self, uow: UnitOfWork, host_policy: HostPolicy):
        self.uow = uow
        self.host_policy = host_policy

    async def execute(
        self,
        principal: Optional[Principal],
        tenant_id: UUID,
        domain: Optional[str],
    ) -> Result[TenantInfo]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        new_domain = normalize_domain(domain) or None
        if new_domain is not None and not is_valid_domain(new_domain):
            return Return.err(InvalidDomainError(f"Invalid domain name: {new_domain!r}"))
        if (
            new_domain is not None
            and self.host_policy.classify(new_domain).kind != HostKind.custom_domain
        ):
            return Return.err(
                InvalidDomainError(f"{new_domain!r} is a platform host, not a custom domain")
            )

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            tenant, membership = context

            capabilities = resolve_capabilities(membership.role, membership.permissions)
            if Capability.manage_domain not in capabilities:
                return Return.err(InsufficientRoleError())

            if new_domain == tenant.custom_domain:
                return Return.ok(TenantInfo.from_entity(tenant))

            old_domain = tenant.custom_domain

            if new_domain is not None:
                subscription = await self.uow.subscriptions.get_current_for_user(
                    tenant.owner_id
                )
                if not is_feature_enabled(subscription, FEATURE_CUSTOM_DOMAIN):
                    return Return.err(
                        FeatureNotEnabledError("Custom domains require the Avançado plan")
                    )

                service = DomainVerificationService(self.uow.tenants)
                availability = await service.check_availability(
                    new_domain, ignore_tenant_id=tenant.id
                )
                if availability.is_err():
                    return availability
                if not availability.value:
                    return Return.err(DomainUnavailableError())

            tenant.custom_domain = new_domain
            tenant.domain_verified = False
            tenant.updated_at = utcnow()
            try:
                tenant = await self.uow.tenants.update(tenant)
            except DuplicateKeyError:
                logger.warning(f"Domain '{new_domain}' was taken concurrently")
                return Return.err(DomainUnavailableError())

            await self.uow.audit_events.create(
                AuditEvent(
                    tenant_id=tenant.id,
                    user_id=principal.id,
                    action="custom_domain_set" if new_domain else "custom_domain_removed",
                    event_metadata={"old_domain": old_domain, "new_domain": new_domain},
                )
            )

            await self.uow.commit()

            return Return.ok(TenantInfo.from_entity(tenant))
