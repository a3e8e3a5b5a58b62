import pytest
from httpx import AsyncClient


async def invite(client, tenant_id, inviter, email, role):
    return await client.post(
        f"/api/tenants/{tenant_id}/members",
        json={"email": email, "role": role},
        headers=inviter.headers,
    )


@pytest.mark.asyncio
async def test_owner_invites_and_member_resolves_tenant(
    client: AsyncClient, owner_tenant, create_user
):
    owner, tenant = owner_tenant
    ana = await create_user("ana@oficina.com.br", plan=None)

    response = await invite(client, tenant["id"], owner, "ana@oficina.com.br", "manager")

    assert response.status_code == 201
    assert response.json()["role"] == "manager"
    assert response.json()["status"] == "active"

    role = await client.get(f"/api/tenants/{tenant['id']}/role", headers=ana.headers)
    assert role.json()["role"] == "manager"

    members = await client.get(f"/api/tenants/{tenant['id']}/members", headers=ana.headers)
    assert sorted(m["email"] for m in members.json()) == [
        "ana@oficina.com.br",
        "owner@oficina.com.br",
    ]


@pytest.mark.asyncio
async def test_admin_cannot_invite_admin(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    admin = await create_user("admin@oficina.com.br", plan=None)
    await create_user("other@oficina.com.br", plan=None)
    await invite(client, tenant["id"], owner, admin.email, "admin")

    response = await invite(client, tenant["id"], admin, "other@oficina.com.br", "admin")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_invite_unknown_email(client: AsyncClient, owner_tenant):
    owner, tenant = owner_tenant

    response = await invite(client, tenant["id"], owner, "ghost@nowhere.com", "employee")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "PRINCIPAL_NOT_FOUND"


@pytest.mark.asyncio
async def test_invite_twice(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    await create_user("ana@oficina.com.br", plan=None)
    await invite(client, tenant["id"], owner, "ana@oficina.com.br", "employee")

    response = await invite(client, tenant["id"], owner, "ana@oficina.com.br", "employee")

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "ALREADY_MEMBER"


@pytest.mark.asyncio
async def test_owner_cannot_be_removed(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    admin = await create_user("admin@oficina.com.br", plan=None)
    await invite(client, tenant["id"], owner, admin.email, "admin")
    members = await client.get(f"/api/tenants/{tenant['id']}/members", headers=owner.headers)
    owner_membership = next(m for m in members.json() if m["role"] == "owner")

    response = await client.delete(
        f"/api/memberships/{owner_membership['id']}", headers=admin.headers
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CANNOT_REMOVE_OWNER"


@pytest.mark.asyncio
async def test_change_role_remove_and_reinvite(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    ana = await create_user("ana@oficina.com.br", plan=None)
    invited = await invite(client, tenant["id"], owner, ana.email, "employee")
    membership_id = invited.json()["id"]

    promoted = await client.patch(
        f"/api/memberships/{membership_id}/role",
        json={"role": "manager"},
        headers=owner.headers,
    )
    assert promoted.json()["role"] == "manager"

    removed = await client.delete(f"/api/memberships/{membership_id}", headers=owner.headers)
    assert removed.json() == {"status": "removed"}

    role = await client.get(f"/api/tenants/{tenant['id']}/role", headers=ana.headers)
    assert role.json()["role"] is None

    reinvited = await invite(client, tenant["id"], owner, ana.email, "employee")
    assert reinvited.status_code == 201
    assert reinvited.json()["id"] == membership_id
    assert reinvited.json()["status"] == "active"


@pytest.mark.asyncio
async def test_permission_overrides(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    ana = await create_user("ana@oficina.com.br", plan=None)
    invited = await invite(client, tenant["id"], owner, ana.email, "employee")

    response = await client.put(
        f"/api/memberships/{invited.json()['id']}/permissions",
        json={"permissions": {"view_reports": True}},
        headers=owner.headers,
    )
    assert response.status_code == 200

    role = await client.get(f"/api/tenants/{tenant['id']}/role", headers=ana.headers)
    assert role.json()["capabilities"] == ["manage_services", "view_reports"]


@pytest.mark.asyncio
async def test_outsider_cannot_see_members(client: AsyncClient, owner_tenant, create_user):
    _, tenant = owner_tenant
    outsider = await create_user("outsider@example.com", plan=None)

    response = await client.get(
        f"/api/tenants/{tenant['id']}/members", headers=outsider.headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TENANT_NOT_FOUND"


@pytest.mark.asyncio
async def test_outsider_removing_owner_gets_not_found(
    client: AsyncClient, owner_tenant, create_user
):
    owner, tenant = owner_tenant
    outsider = await create_user("outsider@example.com", plan=None)
    members = await client.get(f"/api/tenants/{tenant['id']}/members", headers=owner.headers)
    owner_membership = members.json()[0]

    response = await client.delete(
        f"/api/memberships/{owner_membership['id']}", headers=outsider.headers
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MEMBERSHIP_NOT_FOUND"
