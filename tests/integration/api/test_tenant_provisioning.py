from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from bizhub.domain.entities import (
    AuditEvent,
    Membership,
    SubscriptionStatus,
    Tenant,
    TenantStatus,
)


@pytest.mark.asyncio
async def test_first_login_then_create_then_resolve(client: AsyncClient, create_user, catalog):
    """A new owner sees no tenant, creates one, then resolves it as owner"""
    user = await create_user("silva@oficina.com.br")

    before = await client.get("/api/tenants/current", headers=user.headers)
    assert before.status_code == 200
    assert before.json()["tenant"] is None

    created = await client.post(
        "/api/tenants",
        json={"business_name": "Oficina Silva", "segment_id": str(catalog["segment_id"])},
        headers=user.headers,
    )
    assert created.status_code == 201
    assert created.json()["role"] == "owner"
    assert created.json()["tenant"]["subdomain"] == "oficinasilva"

    after = await client.get("/api/tenants/current", headers=user.headers)
    data = after.json()
    assert data["tenant"]["id"] == created.json()["tenant"]["id"]
    assert data["role"] == "owner"
    assert "manage_members" in data["capabilities"]


@pytest.mark.asyncio
async def test_colliding_names_get_suffixed_subdomains(client: AsyncClient, create_user, catalog):
    first = await create_user("a@acme.com")
    second = await create_user("b@acme.com")
    payload = {"business_name": "Acme Corp!!", "segment_id": str(catalog["segment_id"])}

    r1 = await client.post("/api/tenants", json=payload, headers=first.headers)
    r2 = await client.post("/api/tenants", json=payload, headers=second.headers)

    assert r1.json()["tenant"]["subdomain"] == "acmecorp"
    assert r2.json()["tenant"]["subdomain"] == "acmecorp1"


@pytest.mark.asyncio
async def test_creation_is_atomic(client: AsyncClient, db_session, owner_tenant):
    owner, tenant = owner_tenant

    memberships = (await db_session.exec(select(Membership))).all()
    events = (await db_session.exec(select(AuditEvent))).all()

    assert [(str(m.tenant_id), m.user_id, m.role.value) for m in memberships] == [
        (tenant["id"], owner.id, "owner")
    ]
    assert [e.action for e in events] == ["tenant_created"]


@pytest.mark.asyncio
async def test_second_tenant_rejected(client: AsyncClient, owner_tenant, catalog):
    owner, _ = owner_tenant

    response = await client.post(
        "/api/tenants",
        json={"business_name": "Outra Oficina", "segment_id": str(catalog["segment_id"])},
        headers=owner.headers,
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TENANT_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_subscription_required(client: AsyncClient, create_user, catalog):
    user = await create_user("free@oficina.com.br", status=SubscriptionStatus.expired)

    response = await client.post(
        "/api/tenants",
        json={"business_name": "Oficina", "segment_id": str(catalog["segment_id"])},
        headers=user.headers,
    )

    assert response.status_code == 402
    assert response.json()["error"]["code"] == "SUBSCRIPTION_REQUIRED"


@pytest.mark.asyncio
async def test_unauthenticated_requests_fail_closed(client: AsyncClient, catalog):
    no_token = await client.get("/api/tenants/current")
    bad_token = await client.get(
        "/api/tenants/current", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert no_token.status_code == 401
    assert bad_token.status_code == 401
    assert bad_token.json()["error"]["code"] == "NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_subdomain_host_resolves_only_for_members(
    client: AsyncClient, owner_tenant, create_user
):
    owner, tenant = owner_tenant
    outsider = await create_user("outsider@example.com")
    host = {"host": "oficinasilva.bizhub.app"}

    as_owner = await client.get("/api/tenants/current", headers={**owner.headers, **host})
    as_outsider = await client.get(
        "/api/tenants/current", headers={**outsider.headers, **host}
    )

    assert as_owner.json()["tenant"]["id"] == tenant["id"]
    assert as_outsider.status_code == 200
    assert as_outsider.json()["tenant"] is None


@pytest.mark.asyncio
async def test_owner_updates_settings_and_cancels(client: AsyncClient, owner_tenant):
    owner, tenant = owner_tenant

    updated = await client.patch(
        f"/api/tenants/{tenant['id']}",
        json={"business_name": "Oficina Silva & Filhos", "brand_colors": {"primary": "#123456"}},
        headers=owner.headers,
    )
    assert updated.status_code == 200
    assert updated.json()["business_name"] == "Oficina Silva & Filhos"
    assert updated.json()["subdomain"] == "oficinasilva"

    cancelled = await client.post(f"/api/tenants/{tenant['id']}/cancel", headers=owner.headers)
    assert cancelled.json()["status"] == "cancelled"

    current = await client.get("/api/tenants/current", headers=owner.headers)
    assert current.json()["tenant"] is None


@pytest.mark.asyncio
async def test_list_segments(client: AsyncClient, catalog):
    response = await client.get("/api/segments")

    assert response.status_code == 200
    assert [s["slug"] for s in response.json()] == ["oficinas"]


@pytest.mark.asyncio
async def test_storage_allows_one_open_tenant_per_owner(db_session, owner_tenant, catalog):
    owner, tenant = owner_tenant
    db_session.add(
        Tenant(
            owner_id=owner.id,
            segment_id=catalog["segment_id"],
            business_name="Segunda Oficina",
            business_slug="segundaoficina",
            subdomain="segundaoficina",
        )
    )

    with pytest.raises(IntegrityError):
        await db_session.commit()
    await db_session.rollback()

    # A cancelled tenant frees the owner slot
    cancelled = await db_session.get(Tenant, UUID(tenant["id"]))
    cancelled.status = TenantStatus.cancelled
    db_session.add(cancelled)
    db_session.add(
        Tenant(
            owner_id=owner.id,
            segment_id=catalog["segment_id"],
            business_name="Segunda Oficina",
            business_slug="segundaoficina",
            subdomain="segundaoficina",
        )
    )
    await db_session.commit()
