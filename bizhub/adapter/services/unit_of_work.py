from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.adapter.repositories.audit_event_repository import AuditEventRepository
from bizhub.adapter.repositories.membership_repository import MembershipRepository
from bizhub.adapter.repositories.segment_repository import SegmentRepository
from bizhub.adapter.repositories.subscription_repository import SubscriptionRepository
from bizhub.adapter.repositories.tenant_repository import TenantRepository
from bizhub.adapter.repositories.user_repository import UserRepository
from bizhub.app.repositories.errors import DuplicateKeyError
from bizhub.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.segments = SegmentRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.tenants = TenantRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise DuplicateKeyError(str(exc.orig)) from exc

    async def rollback(self):
        await self.session.rollback()
