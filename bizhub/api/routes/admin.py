"""
Admin API Routes - Platform Administration Endpoints

These endpoints are for internal service integrations (e.g., billing system).
Authentication is via Admin API Key, not user JWTs.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from bizhub.api.error import raise_for_error
from bizhub.api.utils.admin_auth import verify_admin_api_key
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.admin import ChangeTenantStatusUseCase
from bizhub.app.use_cases.tenants import TenantStatusResponse
from bizhub.depends import get_unit_of_work
from bizhub.domain.entities import TenantStatus

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_api_key)],
)


@router.post(
    "/tenants/{tenant_id}/suspend",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
)
async def suspend_tenant(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Suspend Tenant

    Billing endpoint to suspend a tenant, e.g. for non-payment.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION (cancelled tenant)
    """
    result = await ChangeTenantStatusUseCase(uow).execute(tenant_id, TenantStatus.suspended)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/restore",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
)
async def restore_tenant(
    tenant_id: UUID,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore Tenant

    Billing endpoint to reactivate a suspended tenant after payment.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: INVALID_STATUS_TRANSITION (cancelled tenant)
    """
    result = await ChangeTenantStatusUseCase(uow).execute(tenant_id, TenantStatus.active)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
