import pytest

from bizhub.app.services.host_policy import HostPolicy
from bizhub.app.use_cases.tenants import ResolveTenantUseCase
from bizhub.domain.entities import MembershipRole, MembershipStatus, TenantStatus
from bizhub.domain.errors import DataIntegrityError, NotAuthenticatedError
from tests.fixtures.factories import make_membership, make_tenant

POLICY = HostPolicy.from_config("bizhub.app", ["localhost"])


@pytest.mark.asyncio
async def test_no_tenant_yet_is_not_an_error(mock_uow, principal):
    mock_uow.tenants.list_open_by_owner.return_value = []

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(principal, "localhost")

    assert result.is_ok()
    assert result.value.tenant is None
    assert result.value.role is None


@pytest.mark.asyncio
async def test_default_host_resolves_owned_tenant(mock_uow, principal):
    tenant = make_tenant(principal.id)
    mock_uow.tenants.list_open_by_owner.return_value = [tenant]
    mock_uow.memberships.get_by_user_and_tenant.return_value = make_membership(
        tenant.id, principal.id, MembershipRole.owner
    )

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(principal, "localhost:3000")

    assert result.value.tenant.id == str(tenant.id)
    assert result.value.role == "owner"
    assert "manage_domain" in result.value.capabilities


@pytest.mark.asyncio
async def test_subdomain_host_resolves_for_member(mock_uow, principal):
    tenant = make_tenant()
    mock_uow.tenants.get_by_subdomain.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = make_membership(
        tenant.id, principal.id, MembershipRole.manager
    )

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(
        principal, "oficinasilva.bizhub.app"
    )

    mock_uow.tenants.get_by_subdomain.assert_awaited_once_with("oficinasilva")
    assert result.value.role == "manager"


@pytest.mark.asyncio
async def test_custom_domain_host_uses_verified_lookup(mock_uow, principal):
    tenant = make_tenant(custom_domain="shop.biz", domain_verified=True)
    mock_uow.tenants.get_by_verified_custom_domain.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = make_membership(
        tenant.id, principal.id
    )

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(principal, "Shop.biz")

    mock_uow.tenants.get_by_verified_custom_domain.assert_awaited_once_with("shop.biz")
    assert result.value.role == "employee"


@pytest.mark.asyncio
async def test_non_member_gets_empty_answer(mock_uow, principal):
    mock_uow.tenants.get_by_subdomain.return_value = make_tenant()
    mock_uow.memberships.get_by_user_and_tenant.return_value = None

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(
        principal, "oficinasilva.bizhub.app"
    )

    assert result.value.tenant is None


@pytest.mark.asyncio
async def test_inactive_member_gets_empty_answer(mock_uow, principal):
    tenant = make_tenant()
    mock_uow.tenants.get_by_subdomain.return_value = tenant
    mock_uow.memberships.get_by_user_and_tenant.return_value = make_membership(
        tenant.id, principal.id, status=MembershipStatus.inactive
    )

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(
        principal, "oficinasilva.bizhub.app"
    )

    assert result.value.tenant is None


@pytest.mark.asyncio
async def test_cancelled_tenant_never_resolves(mock_uow, principal):
    tenant = make_tenant(status=TenantStatus.cancelled)
    mock_uow.tenants.get_by_subdomain.return_value = tenant

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(
        principal, "oficinasilva.bizhub.app"
    )

    assert result.value.tenant is None
    mock_uow.memberships.get_by_user_and_tenant.assert_not_called()


@pytest.mark.asyncio
async def test_owner_without_membership_is_integrity_error(mock_uow, principal):
    mock_uow.tenants.list_open_by_owner.return_value = [make_tenant(principal.id)]
    mock_uow.memberships.get_by_user_and_tenant.return_value = None

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(principal, "localhost")

    assert isinstance(result.error, DataIntegrityError)


@pytest.mark.asyncio
async def test_several_open_tenants_is_integrity_error(mock_uow, principal):
    mock_uow.tenants.list_open_by_owner.return_value = [
        make_tenant(principal.id),
        make_tenant(principal.id, subdomain="oficinasilva1"),
    ]

    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(principal, "localhost")

    assert isinstance(result.error, DataIntegrityError)


@pytest.mark.asyncio
async def test_requires_principal(mock_uow):
    result = await ResolveTenantUseCase(mock_uow, POLICY).execute(None, "localhost")

    assert isinstance(result.error, NotAuthenticatedError)
