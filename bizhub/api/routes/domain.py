from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from bizhub.api.error import raise_for_error
from bizhub.app.services.domain_verification import IReachabilityProbe
from bizhub.app.services.host_policy import HostPolicy
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.domains import (
    CheckDomainAvailabilityUseCase,
    DomainAvailabilityResponse,
    DomainVerificationResponse,
    SetCustomDomainCommand,
    SetCustomDomainUseCase,
    VerifyCustomDomainUseCase,
)
from bizhub.app.use_cases.tenants import TenantInfo
from bizhub.depends import (
    get_current_principal,
    get_host_policy,
    get_reachability_probe,
    get_unit_of_work,
    rate_limit,
)
from bizhub.domain.entities import Principal

router = APIRouter(tags=["Domains"])


@router.get(
    "/domains/availability",
    status_code=status.HTTP_200_OK,
    response_model=DomainAvailabilityResponse,
)
async def check_domain_availability(
    domain: str = Query(..., description="Domain to check, e.g. shop.biz"),
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Check Domain Availability

    Raises:
        - 400 Bad Request: INVALID_DOMAIN
        - 503 Service Unavailable: STORAGE_ERROR
    """
    result = await CheckDomainAvailabilityUseCase(uow).execute(principal, domain)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/tenants/{tenant_id}/custom-domain",
    status_code=status.HTTP_200_OK,
    response_model=TenantInfo,
)
async def set_custom_domain(
    tenant_id: UUID,
    command: SetCustomDomainCommand,
    principal: Optional[Principal] = Depends(get_current_principal),
    host_policy: HostPolicy = Depends(get_host_policy),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set or Clear Custom Domain

    Raises:
        - 400 Bad Request: INVALID_DOMAIN (also for platform hosts)
        - 403 Forbidden: INSUFFICIENT_ROLE, FEATURE_NOT_ENABLED
        - 404 Not Found: TENANT_NOT_FOUND
        - 409 Conflict: DOMAIN_UNAVAILABLE
    """
    use_case = SetCustomDomainUseCase(uow, host_policy)
    result = await use_case.execute(principal, tenant_id, command.domain)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/custom-domain/verify",
    status_code=status.HTTP_200_OK,
    response_model=DomainVerificationResponse,
    dependencies=[Depends(rate_limit("verify_domain"))],
)
async def verify_custom_domain(
    tenant_id: UUID,
    principal: Optional[Principal] = Depends(get_current_principal),
    probe: IReachabilityProbe = Depends(get_reachability_probe),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Verify Custom Domain

    Probes the domain over HTTPS; ``verified`` is false when it does not answer.

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND, CUSTOM_DOMAIN_NOT_SET
    """
    result = await VerifyCustomDomainUseCase(uow, probe).execute(principal, tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
