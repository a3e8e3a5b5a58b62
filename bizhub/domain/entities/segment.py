"""
Segment Entity

Industry classification a business belongs to (mechanic shop, auto parts, ...).
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import CatalogStatus


class Segment(SQLModel, table=True):
    __tablename__ = "business_segments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(unique=True, index=True, max_length=100)
    description: Optional[str] = Field(default=None)
    icon: Optional[str] = Field(default=None, max_length=100)

    status: CatalogStatus = Field(default=CatalogStatus.active)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
