from uuid import uuid4

import pytest

from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.use_cases.memberships import InviteMemberUseCase
from bizhub.domain.entities import MembershipRole, MembershipStatus, User
from bizhub.domain.errors import (
    AlreadyMemberError,
    InsufficientRoleError,
    InvalidRoleError,
    NotAuthenticatedError,
    PrincipalNotFoundError,
    TenantNotFoundError,
)
from tests.fixtures.factories import make_membership, make_tenant


@pytest.fixture
def tenant():
    return make_tenant()


@pytest.fixture
def invitee():
    return User(id=uuid4(), email="ana@oficina.com.br", full_name="Ana")


def setup_inviter(mock_uow, tenant, principal, role, existing=None, **overrides):
    """First membership lookup is the inviter, the second the invitee"""
    inviter = make_membership(tenant.id, principal.id, role, **overrides)
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.side_effect = [inviter, existing]
    mock_uow.memberships.create.side_effect = lambda membership: membership
    return inviter


@pytest.mark.asyncio
async def test_owner_invites_admin(mock_uow, principal, tenant, invitee):
    # Arrange
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner)
    mock_uow.users.get_by_email.return_value = invitee

    # Act
    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, " Ana@Oficina.com.br ", "admin"
    )

    # Assert
    assert result.is_ok()
    assert result.value.role == "admin"
    assert result.value.status == "active"
    assert result.value.email == invitee.email
    assert result.value.joined_at == result.value.invited_at
    mock_uow.users.get_by_email.assert_awaited_once_with("ana@oficina.com.br")

    membership = mock_uow.memberships.create.call_args.args[0]
    assert membership.invited_by == principal.id
    assert membership.user_id == invitee.id

    event = mock_uow.audit_events.create.call_args.args[0]
    assert event.action == "member_invited"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_admin_cannot_invite_admin(mock_uow, principal, tenant):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.admin)

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ana@oficina.com.br", "admin"
    )

    assert isinstance(result.error, InsufficientRoleError)
    mock_uow.memberships.create.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_nobody_invites_an_owner(mock_uow, principal, tenant):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner)

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ana@oficina.com.br", "owner"
    )

    assert isinstance(result.error, InsufficientRoleError)


@pytest.mark.asyncio
async def test_manager_invites_employee(mock_uow, principal, tenant, invitee):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.manager)
    mock_uow.users.get_by_email.return_value = invitee

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, invitee.email, "employee"
    )

    assert result.is_ok()


@pytest.mark.asyncio
async def test_revoked_manage_members_blocks_invites(mock_uow, principal, tenant):
    setup_inviter(
        mock_uow,
        tenant,
        principal,
        MembershipRole.manager,
        permissions={"manage_members": False},
    )

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ana@oficina.com.br", "employee"
    )

    assert isinstance(result.error, InsufficientRoleError)


@pytest.mark.asyncio
async def test_employee_cannot_invite(mock_uow, principal, tenant):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.employee)

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ana@oficina.com.br", "employee"
    )

    assert isinstance(result.error, InsufficientRoleError)


@pytest.mark.asyncio
async def test_unknown_email(mock_uow, principal, tenant):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner)
    mock_uow.users.get_by_email.return_value = None

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ghost@nowhere.com", "employee"
    )

    assert isinstance(result.error, PrincipalNotFoundError)


@pytest.mark.asyncio
async def test_already_member(mock_uow, principal, tenant, invitee):
    existing = make_membership(tenant.id, invitee.id, MembershipRole.employee)
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner, existing=existing)
    mock_uow.users.get_by_email.return_value = invitee

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, invitee.email, "manager"
    )

    assert isinstance(result.error, AlreadyMemberError)


@pytest.mark.asyncio
async def test_concurrent_duplicate_insert_is_already_member(
    mock_uow, principal, tenant, invitee
):
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner)
    mock_uow.users.get_by_email.return_value = invitee
    mock_uow.memberships.create.side_effect = DuplicateKeyError("unique violation")

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, invitee.email, "manager"
    )

    assert isinstance(result.error, AlreadyMemberError)


@pytest.mark.asyncio
async def test_inactive_membership_is_reactivated(mock_uow, principal, tenant, invitee):
    # Arrange
    existing = make_membership(
        tenant.id,
        invitee.id,
        MembershipRole.admin,
        status=MembershipStatus.inactive,
        permissions={"view_reports": True},
    )
    setup_inviter(mock_uow, tenant, principal, MembershipRole.owner, existing=existing)
    mock_uow.users.get_by_email.return_value = invitee

    # Act
    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, invitee.email, "employee"
    )

    # Assert
    assert result.is_ok()
    assert result.value.id == str(existing.id)
    assert existing.status == MembershipStatus.active
    assert existing.role == MembershipRole.employee
    assert existing.permissions == {}
    mock_uow.memberships.create.assert_not_called()
    event = mock_uow.audit_events.create.call_args.args[0]
    assert event.action == "member_reactivated"


@pytest.mark.asyncio
async def test_non_member_sees_tenant_not_found(mock_uow, principal, tenant):
    mock_uow.tenants.get_by_id.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = None

    result = await InviteMemberUseCase(mock_uow).execute(
        principal, tenant.id, "ana@oficina.com.br", "employee"
    )

    assert isinstance(result.error, TenantNotFoundError)


@pytest.mark.asyncio
async def test_invalid_role(mock_uow, principal):
    result = await InviteMemberUseCase(mock_uow).execute(
        principal, uuid4(), "ana@oficina.com.br", "viewer"
    )

    assert isinstance(result.error, InvalidRoleError)


@pytest.mark.asyncio
async def test_requires_principal(mock_uow):
    result = await InviteMemberUseCase(mock_uow).execute(
        None, uuid4(), "ana@oficina.com.br", "employee"
    )

    assert isinstance(result.error, NotAuthenticatedError)
