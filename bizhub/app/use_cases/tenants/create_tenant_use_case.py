"""
Create Tenant Use Case

Provisions a business for a subscribed user: allocates a subdomain, inserts
the tenant and its owner membership in one transaction.
"""

import logging
from typing import Optional
from uuid import UUID

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.memberships import create_owner_membership
from bizhub.app.services.subdomain_allocator import (
    DEFAULT_MAX_ATTEMPTS,
    SubdomainAllocator,
)
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import (
    AuditEvent,
    CatalogStatus,
    MembershipRole,
    Principal,
    Tenant,
)
from bizhub.domain.entities.tenant import default_settings
from bizhub.domain.errors import (
    AllocationExhaustedError,
    InvalidBusinessNameError,
    NotAuthenticatedError,
    SegmentNotFoundError,
    SubscriptionRequiredError,
    TenantAlreadyExistsError,
)
from bizhub.libs.result import Result, Return

from .dtos import CreateTenantCommand, CreateTenantResponse, TenantInfo

logger = logging.getLogger(__name__)

DEFAULT_CREATE_ATTEMPTS = 5


class CreateTenantUseCase:
    """
    Use case for provisioning a tenant.

    Business Rules:
    - Principal must hold an active or trial subscription
    - Principal may own at most one non-cancelled tenant
    - Segment must exist and be active
    - Subdomain is allocated from the business name; a uniqueness violation
      from storage (lost race) rolls back and retries with the next candidate
    - Tenant, owner membership and audit event commit together
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subdomain_max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        max_create_attempts: int = DEFAULT_CREATE_ATTEMPTS,
    ):
        self.uow = uow
        self.subdomain_max_attempts = subdomain_max_attempts
        self.max_create_attempts = max_create_attempts

    async def execute(
        self, principal: Optional[Principal], command: CreateTenantCommand
    ) -> Result[CreateTenantResponse]:
        """
        Execute create tenant use case.

        Args:
            principal: Authenticated user who becomes the owner
            command: Business details

        Returns:
            Result with CreateTenantResponse, or Error
        """
        if principal is None:
            return Return.err(NotAuthenticatedError())

        business_name = command.business_name.strip()
        if not business_name:
            return Return.err(InvalidBusinessNameError())

        async with self.uow:
            subscription = await self.uow.subscriptions.get_current_for_user(principal.id)
            if subscription is None:
                return Return.err(SubscriptionRequiredError())
            subscription_id = subscription.id

            segment = await self.uow.segments.get_by_id(command.segment_id)
            if segment is None or segment.status != CatalogStatus.active:
                return Return.err(SegmentNotFoundError())

            allocator = SubdomainAllocator(self.uow.tenants, self.subdomain_max_attempts)
            lost_candidates = set()

            for attempt in range(1, self.max_create_attempts + 1):
                owned = await self.uow.tenants.list_open_by_owner(principal.id)
                if owned:
                    return Return.err(TenantAlreadyExistsError())

                allocation = await allocator.allocate(
                    business_name, exclude=lost_candidates
                )
                if allocation.is_err():
                    return allocation
                subdomain = allocation.value

                try:
                    provisioned = await self._provision(
                        principal.id, subscription_id, business_name, subdomain, command
                    )
                    if provisioned.is_err():
                        await self.uow.rollback()
                        return provisioned
                    await self.uow.commit()
                except DuplicateKeyError:
                    await self.uow.rollback()
                    lost_candidates.add(subdomain)
                    logger.warning(
                        f"Subdomain '{subdomain}' taken concurrently "
                        f"(attempt {attempt}/{self.max_create_attempts}), retrying"
                    )
                    continue

                tenant = provisioned.value
                logger.info(f"Tenant {tenant.id} created with subdomain '{subdomain}'")
                return Return.ok(
                    CreateTenantResponse(
                        tenant=TenantInfo.from_entity(tenant),
                        role=MembershipRole.owner.value,
                    )
                )

            return Return.err(AllocationExhaustedError())

    async def _provision(
        self,
        owner_id: UUID,
        subscription_id: UUID,
        business_name: str,
        subdomain: str,
        command: CreateTenantCommand,
    ) -> Result[Tenant]:
        settings = default_settings()
        settings.update(command.settings)

        tenant = Tenant(
            owner_id=owner_id,
            subscription_id=subscription_id,
            segment_id=command.segment_id,
            business_name=business_name,
            business_slug=subdomain,
            subdomain=subdomain,
            logo_url=command.logo_url,
            brand_colors=dict(command.brand_colors),
            settings=settings,
        )
        tenant = await self.uow.tenants.create(tenant)

        membership = await create_owner_membership(self.uow, tenant.id, owner_id)
        if membership.is_err():
            return membership

        await self.uow.audit_events.create(
            AuditEvent(
                tenant_id=tenant.id,
                user_id=owner_id,
                action="tenant_created",
                event_metadata={
                    "business_name": business_name,
                    "subdomain": subdomain,
                    "segment_id": str(command.segment_id),
                },
            )
        )
        return Return.ok(tenant)
