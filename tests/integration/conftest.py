from dataclasses import dataclass
from typing import Dict
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from bizhub.api.utils.jwt import create_access_token
from bizhub.app.services.domain_verification import IReachabilityProbe
from bizhub.app.services.host_policy import HostPolicy
from bizhub.depends import get_host_policy, get_reachability_probe, get_unit_of_work
from bizhub.domain.entities import (
    Segment,
    Subscription,
    SubscriptionPlan,
    SubscriptionStatus,
    User,
)


class FakeProbe(IReachabilityProbe):
    def __init__(self):
        self.reachable = set()

    async def is_reachable(self, domain: str) -> bool:
        return domain in self.reachable


@dataclass(frozen=True)
class SeededUser:
    id: UUID
    email: str
    headers: Dict[str, str]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def catalog(db_session) -> Dict[str, UUID]:
    """Segment plus the basico/avancado plans, as owned by the catalog service"""
    segment = Segment(name="Oficinas", slug="oficinas")
    db_session.add(segment)
    await db_session.flush()

    ids = {"segment_id": segment.id}
    for slug in ("basico", "avancado"):
        plan = SubscriptionPlan(segment_id=segment.id, name=slug.title(), slug=slug)
        db_session.add(plan)
        await db_session.flush()
        ids[slug] = plan.id

    await db_session.commit()
    return ids


@pytest.fixture
def create_user(db_session, catalog):
    """Factory: account (and optionally a subscription) as issued by identity/billing"""

    async def factory(
        email: str,
        plan: str = "basico",
        status: SubscriptionStatus = SubscriptionStatus.active,
    ) -> SeededUser:
        user = User(email=email)
        db_session.add(user)
        await db_session.flush()
        user_id = user.id

        if plan is not None:
            db_session.add(Subscription(user_id=user_id, plan_id=catalog[plan], status=status))

        await db_session.commit()
        token = create_access_token(user_id, email)
        return SeededUser(
            id=user_id, email=email, headers={"Authorization": f"Bearer {token}"}
        )

    return factory


@pytest.fixture
def probe():
    return FakeProbe()


@pytest_asyncio.fixture
async def client(db_session, probe):
    from bizhub.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_host_policy] = lambda: HostPolicy.from_config(
        "bizhub.app", ["test", "localhost"]
    )
    app.dependency_overrides[get_reachability_probe] = lambda: probe

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def owner_tenant(client, create_user, catalog):
    """Owner on the avancado plan with a provisioned business"""
    owner = await create_user("owner@oficina.com.br", plan="avancado")
    response = await client.post(
        "/api/tenants",
        json={"business_name": "Oficina Silva", "segment_id": str(catalog["segment_id"])},
        headers=owner.headers,
    )
    assert response.status_code == 201
    return owner, response.json()["tenant"]
