from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from uuid import UUID

from bizhub.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, user_ids: Sequence[UUID]) -> List[User]:
        """Get all users whose ID is listed"""
        pass
