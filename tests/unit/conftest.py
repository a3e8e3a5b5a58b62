from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from bizhub.domain.entities import Principal


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable; tests set return values explicitly
    uow.users = AsyncMock()
    uow.segments = AsyncMock()
    uow.subscriptions = AsyncMock()
    uow.tenants = AsyncMock()
    uow.memberships = AsyncMock()
    uow.audit_events = AsyncMock()
    uow.memberships.update.side_effect = lambda membership: membership
    uow.tenants.update.side_effect = lambda tenant: tenant
    return uow


@pytest.fixture
def principal():
    return Principal(id=uuid4(), email="owner@oficina.com.br")
