"""
Subscription Entities

Plans and user subscriptions belong to the billing subsystem; the tenancy
core reads them to authorize tenant creation and premium features.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from ..base import utcnow
from .enums import BillingPeriod, CatalogStatus, SubscriptionStatus


class SubscriptionPlan(SQLModel, table=True):
    """
    SubscriptionPlan entity - a billing tier offered for a segment.

    Business Rules:
    - ``slug`` identifies the tier to the entitlement gate ("avancado" is the top tier)
    """

    __tablename__ = "subscription_plans"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    segment_id: UUID = Field(foreign_key="business_segments.id", index=True)

    name: str = Field(max_length=255)
    slug: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None)

    price: Decimal = Field(default=0, max_digits=10, decimal_places=2)
    billing_period: BillingPeriod = Field(default=BillingPeriod.monthly)
    trial_days: int = Field(default=0)
    max_users: int = Field(default=1)

    status: CatalogStatus = Field(default=CatalogStatus.active)


class Subscription(SQLModel, table=True):
    """
    Subscription entity - a user's enrollment in a plan.

    Business Rules:
    - Created by billing after the payment gateway confirms (payment_id)
    - Status active or trial unlocks tenant creation and plan features
    """

    __tablename__ = "user_subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    plan_id: UUID = Field(foreign_key="subscription_plans.id", nullable=False)

    status: SubscriptionStatus = Field(default=SubscriptionStatus.pending)

    payment_method: Optional[str] = Field(default=None, max_length=50)
    payment_id: Optional[str] = Field(default=None, max_length=255)
    auto_renew: bool = Field(default=True)

    # Timestamps
    starts_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    trial_ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    plan: Optional[SubscriptionPlan] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin"}
    )

    __table_args__ = (Index("idx_subscription_user_status", "user_id", "status"),)
