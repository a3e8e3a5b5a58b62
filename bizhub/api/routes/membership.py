from typing import Dict, List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from bizhub.api.error import raise_for_error
from bizhub.app.services.unit_of_work import UnitOfWork
from bizhub.app.use_cases.memberships import (
    ChangeRoleUseCase,
    InviteMemberUseCase,
    ListMembersUseCase,
    RemoveMemberUseCase,
    UpdatePermissionsUseCase,
)
from bizhub.app.use_cases.memberships.dtos import MembershipInfo, RemoveMemberResponse
from bizhub.depends import get_current_principal, get_unit_of_work, rate_limit
from bizhub.domain.entities import Principal

router = APIRouter(tags=["Members"])


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    The invitee must already have an account.
    """

    email: EmailStr = Field(..., description="Email of the account to add")
    role: str = Field(..., description="Role to assign (admin/manager/employee)")


class ChangeRoleRequest(BaseModel):
    role: str = Field(..., description="New role (admin/manager/employee)")


class UpdatePermissionsRequest(BaseModel):
    permissions: Dict[str, bool] = Field(
        default_factory=dict, description="Capability overrides, e.g. {'view_reports': true}"
    )


@router.get(
    "/tenants/{tenant_id}/members",
    status_code=status.HTTP_200_OK,
    response_model=List[MembershipInfo],
)
async def list_members(
    tenant_id: UUID,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Team Members"""
    result = await ListMembersUseCase(uow).execute(principal, tenant_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/tenants/{tenant_id}/members",
    status_code=status.HTTP_201_CREATED,
    response_model=MembershipInfo,
    dependencies=[Depends(rate_limit("invite_member"))],
)
async def invite_member(
    tenant_id: UUID,
    request: InviteMemberRequest,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Invite Member

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: TENANT_NOT_FOUND, PRINCIPAL_NOT_FOUND
        - 409 Conflict: ALREADY_MEMBER
    """
    use_case = InviteMemberUseCase(uow)
    result = await use_case.execute(principal, tenant_id, request.email, request.role)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch(
    "/memberships/{membership_id}/role",
    status_code=status.HTTP_200_OK,
    response_model=MembershipInfo,
)
async def change_role(
    membership_id: UUID,
    request: ChangeRoleRequest,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change Member Role

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
    """
    result = await ChangeRoleUseCase(uow).execute(principal, membership_id, request.role)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put(
    "/memberships/{membership_id}/permissions",
    status_code=status.HTTP_200_OK,
    response_model=MembershipInfo,
)
async def update_permissions(
    membership_id: UUID,
    request: UpdatePermissionsRequest,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Replace Member Capability Overrides"""
    use_case = UpdatePermissionsUseCase(uow)
    result = await use_case.execute(principal, membership_id, request.permissions)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/memberships/{membership_id}",
    status_code=status.HTTP_200_OK,
    response_model=RemoveMemberResponse,
)
async def remove_member(
    membership_id: UUID,
    principal: Optional[Principal] = Depends(get_current_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 403 Forbidden: INSUFFICIENT_ROLE
        - 404 Not Found: MEMBERSHIP_NOT_FOUND
        - 409 Conflict: CANNOT_REMOVE_OWNER
    """
    result = await RemoveMemberUseCase(uow).execute(principal, membership_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
