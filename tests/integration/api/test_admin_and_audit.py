import pytest
from httpx import AsyncClient

from config import ApplicationConfig

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest.mark.asyncio
async def test_suspend_and_restore(client: AsyncClient, owner_tenant):
    owner, tenant = owner_tenant

    suspended = await client.post(
        f"/api/admin/tenants/{tenant['id']}/suspend", headers=ADMIN_HEADERS
    )
    assert suspended.status_code == 200
    assert suspended.json() == {"id": tenant["id"], "status": "suspended"}

    current = await client.get("/api/tenants/current", headers=owner.headers)
    assert current.json()["tenant"]["status"] == "suspended"

    restored = await client.post(
        f"/api/admin/tenants/{tenant['id']}/restore", headers=ADMIN_HEADERS
    )
    assert restored.json()["status"] == "active"


@pytest.mark.asyncio
async def test_cancelled_tenant_cannot_be_restored(client: AsyncClient, owner_tenant):
    owner, tenant = owner_tenant
    await client.post(f"/api/tenants/{tenant['id']}/cancel", headers=owner.headers)

    response = await client.post(
        f"/api/admin/tenants/{tenant['id']}/restore", headers=ADMIN_HEADERS
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


@pytest.mark.asyncio
async def test_admin_endpoints_require_api_key(client: AsyncClient, owner_tenant):
    _, tenant = owner_tenant

    missing = await client.post(f"/api/admin/tenants/{tenant['id']}/suspend")
    wrong = await client.post(
        f"/api/admin/tenants/{tenant['id']}/suspend",
        headers={"X-Admin-API-Key": "wrong"},
    )

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert wrong.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_audit_events_are_paginated(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    for name in ("ana", "bia", "caio"):
        user = await create_user(f"{name}@oficina.com.br", plan=None)
        await client.post(
            f"/api/tenants/{tenant['id']}/members",
            json={"email": user.email, "role": "employee"},
            headers=owner.headers,
        )

    url = f"/api/tenants/{tenant['id']}/audit-events"
    first = await client.get(url, params={"limit": 2}, headers=owner.headers)
    assert first.status_code == 200
    page = first.json()
    assert len(page["events"]) == 2
    assert page["next_cursor"] is not None

    second = await client.get(
        url, params={"limit": 2, "cursor": page["next_cursor"]}, headers=owner.headers
    )
    rest = second.json()
    assert rest["next_cursor"] is None

    actions = [e["action"] for e in page["events"] + rest["events"]]
    assert sorted(actions) == ["member_invited"] * 3 + ["tenant_created"]
    assert all(e["user_email"] == owner.email for e in page["events"] + rest["events"])


@pytest.mark.asyncio
async def test_employee_cannot_read_audit_events(client: AsyncClient, owner_tenant, create_user):
    owner, tenant = owner_tenant
    ana = await create_user("ana@oficina.com.br", plan=None)
    await client.post(
        f"/api/tenants/{tenant['id']}/members",
        json={"email": ana.email, "role": "employee"},
        headers=owner.headers,
    )

    response = await client.get(
        f"/api/tenants/{tenant['id']}/audit-events", headers=ana.headers
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"
