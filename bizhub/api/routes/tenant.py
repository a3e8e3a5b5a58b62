from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from config import ApplicationConfig
from bizhub.api.error import raise_for_error
from bizhub.app.services.host_policy import HostPolicy
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.memberships import GetEffectiveRoleUseCase
from bizhub.app.use_cases.memberships.dtos import EffectiveRoleResponse
from bizhub.app.use_cases.tenants import (
    CancelTenantUseCase,
    CheckFeatureUseCase,
    CreateTenantCommand,
    CreateTenantResponse,
    CreateTenantUseCase,
    CurrentTenantResponse,
    FeatureResponse,
    ResolveTenantUseCase,
    TenantInfo,
    TenantStatusResponse,
    UpdateTenantSettingsCommand,
    UpdateTenantSettingsUseCase,
)
from bizhub.depends import (
    get_current_principal,
    get_host_policy,
    get_unit_of_work,
    rate_limit,
)
from bizhub.domain.entities import Principal

router = APIRouter(prefix="/tenants", tags=["Tenant"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateTenantResponse,
    dependencies=[Depends(rate_limit("create_tenant"))],
)
async def create_tenant(
    command: CreateTenantCommand,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Business

    Provisions the caller's tenant with an allocated subdomain and makes the
    caller its owner.

    Raises:
        - 401 Unauthorized: NOT_AUTHENTICATED
        - 402 Payment Required: SUBSCRIPTION_REQUIRED
        - 404 Not Found: SEGMENT_NOT_FOUND
        - 409 Conflict: TENANT_ALREADY_EXISTS
        - 503 Service Unavailable: ALLOCATION_EXHAUSTED
    """
    use_case = CreateTenantUseCase(
        uow,
        subdomain_max_attempts=ApplicationConfig.SUBDOMAIN_MAX_ATTEMPTS,
        max_create_attempts=ApplicationConfig.TENANT_CREATE_MAX_ATTEMPTS,
    )
    result = await use_case.execute(principal, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/current", status_code=status.HTTP_200_OK, response_model=CurrentTenantResponse
)
async def get_current_tenant(
    request: Request,
    principal: Optional[Principal] = Depends(get_current_principal),
    host_policy: HostPolicy = Depends(get_host_policy),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Current Tenant

    Resolves the tenant for the request host and the caller's role in it.
    ``tenant`` is null when the caller has no business yet.
    """
    use_case = ResolveTenantUseCase(uow, host_policy)
    result = await use_case.execute(principal, request.headers.get("host"))
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch(
    "/{tenant_id}", status_code=status.HTTP_200_OK, response_model=TenantInfo
)
async def update_tenant_settings(
    tenant_id: UUID,
    command: UpdateTenantSettingsCommand,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Business Settings

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE (needs manage_settings)
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await UpdateTenantSettingsUseCase(uow).execute(principal, tenant_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{tenant_id}/cancel",
    status_code=status.HTTP_200_OK,
    response_model=TenantStatusResponse,
)
async def cancel_tenant(
    tenant_id: UUID,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Cancel Business (owner only)

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND
    """
    result = await CancelTenantUseCase(uow).execute(principal, tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{tenant_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=EffectiveRoleResponse,
)
async def get_effective_role(
    tenant_id: UUID,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Caller's role and capabilities in the tenant (role null for non-members)"""
    result = await GetEffectiveRoleUseCase(uow).execute(principal, tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get(
    "/{tenant_id}/features/{feature_key}",
    status_code=status.HTTP_200_OK,
    response_model=FeatureResponse,
)
async def check_feature(
    tenant_id: UUID,
    feature_key: str,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Whether the tenant's plan unlocks ``feature_key``"""
    result = await CheckFeatureUseCase(uow).execute(principal, tenant_id, feature_key)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
