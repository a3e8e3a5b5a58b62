"""
User Entity

Account known to the identity provider. This service only reads it.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow


class User(SQLModel, table=True):
    """
    User entity - mirror of the identity provider's account records.

    Business Rules:
    - Email must be unique across all users
    - Invitations resolve the invitee by email; unknown emails are rejected
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    full_name: Optional[str] = Field(default=None, max_length=255)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
