"""
Check Feature Use Case

Answers whether a tenant's plan unlocks a feature.
"""

from typing import Optional
from uuid import UUID

from bizhub.app.services.entitlements import is_feature_enabled
from bizhub.app.services.memberships import load_member_context
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.domain.entities import Principal
from bizhub.domain.errors import NotAuthenticatedError, TenantNotFoundError
from bizhub.libs.result import Result, Return

from .dtos import FeatureResponse


class CheckFeatureUseCase:
    """
    Use case for querying a plan-gated feature.

    Business Rules:
    - Any active member may ask
    - The tenant owner's most recent active or trial subscription decides;
      a newer pending checkout does not hide it
    - No side effects
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, principal: Optional[Principal], tenant_id: UUID, feature_key: str
    ) -> Result[FeatureResponse]:
        if principal is None:
            return Return.err(NotAuthenticatedError())

        async with self.uow:
            context = await load_member_context(self.uow, tenant_id, principal.id)
            if context is None:
                return Return.err(TenantNotFoundError())
            tenant, _ = context

            subscription = await self.uow.subscriptions.get_current_for_user(tenant.owner_id)
            return Return.ok(
                FeatureResponse(
                    feature=feature_key,
                    enabled=is_feature_enabled(subscription, feature_key),
                )
            )
