from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import func
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from bizhub.app.repositories.user_repository import IUserRepository
from bizhub.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel (read-only, accounts are external)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, case-insensitive"""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        return await self.session.get(User, user_id)

    async def get_by_ids(self, user_ids: Sequence[UUID]) -> List[User]:
        if not user_ids:
            return []
        stmt = select(User).where(col(User.id).in_(list(user_ids)))
        result = await self.session.exec(stmt)
        return list(result.all())
