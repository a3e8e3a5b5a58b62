"""
Resolve Current Tenant Use Case

Determines which tenant a request belongs to, by host or by owner, and the
principal's effective role in it.
"""

import logging
from typing import Optional

from bizhub.app.services.host_policy import HostKind, HostPolicy
from bizhub.app.services.memberships import get_active_membership
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.capabilities import resolve_capabilities
from bizhub.domain.entities import MembershipRole, Principal, Tenant, TenantStatus
from bizhub.domain.errors import DataIntegrityError, NotAuthenticatedError
from bizhub.libs.result import Result, Return

from .dtos import CurrentTenantResponse, TenantInfo

logger = logging.getLogger(__name__)


class ResolveTenantUseCase:
    """
    Use case for resolving the current tenant context.

    Business Rules:
    - Default platform hosts resolve the tenant owned by the principal
    - <label>.<platform domain> resolves by subdomain
    - Other hosts resolve by verified custom domain
    - Cancelled tenants never resolve
    - A host-resolved tenant is only returned to its active members; everybody
      else gets the same empty answer as for an unknown host
    - No tenant is not an error: the response carries tenant=None
    - Owner without an active owner membership, or several open tenants for
      one owner, is a DataIntegrityError
    """

    def __init__(self, uow: UnitOfWork, host_policy: HostPolicy):
        self.uow = uow
        self.host_policy = host_policy

    async def execute(
        self, principal: Optional[Principal], request_host: Optional[str]
    ) -> Result[CurrentTenantResponse]:
        """
        Execute resolve tenant use case.

        Args:
            principal: Authenticated user
            request_host: Host header of the inbound request

        Returns:
            Result with CurrentTenantResponse, or Error
        """
        if principal is None:
            return Return.err(NotAuthenticatedError())

        match = self.host_policy.classify(request_host)

        async with self.uow:
            if match.kind == HostKind.default:
                owned = await self.uow.tenants.list_open_by_owner(principal.id)
                if len(owned) > 1:
                    logger.error(
                        f"Data integrity: user {principal.id} owns {len(owned)} open tenants"
                    )
                    return Return.err(DataIntegrityError())
                tenant = owned[0] if owned else None
            elif match.kind == HostKind.subdomain:
                tenant = await self.uow.tenants.get_by_subdomain(match.value)
            else:
                tenant = await self.uow.tenants.get_by_verified_custom_domain(match.value)

            if tenant is None or tenant.status == TenantStatus.cancelled:
                return Return.ok(CurrentTenantResponse())

            membership = await get_active_membership(self.uow, tenant.id, principal.id)

            if tenant.owner_id == principal.id and (
                membership is None or membership.role != MembershipRole.owner
            ):
                logger.error(
                    f"Data integrity: tenant {tenant.id} has no active owner "
                    f"membership for its owner {principal.id}"
                )
                return Return.err(DataIntegrityError())

            if membership is None:
                return Return.ok(CurrentTenantResponse())

            return Return.ok(
                self._build_response(tenant, membership.role, membership.permissions)
            )

    @staticmethod
    def _build_response(
        tenant: Tenant, role: MembershipRole, permissions
    ) -> CurrentTenantResponse:
        capabilities = resolve_capabilities(role, permissions)
        return CurrentTenantResponse(
            tenant=TenantInfo.from_entity(tenant),
            role=role.value,
            capabilities=sorted(c.value for c in capabilities),
        )
