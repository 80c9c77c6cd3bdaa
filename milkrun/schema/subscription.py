from datetime import datetime
from enum import Enum
from typing import List, Optional
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlmodel import SQLModel, Field
from milkrun.common.utils import now


class SubscriptionType(str, Enum):
    DAILY = "daily"
    ALTERNATE_DAYS = "alternate_days"
    WEEKLY = "weekly"
    CUSTOM = "custom"


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    CANCELLED = "cancelled"
    EXPIRED = "expired"   # no code path sets this yet


class SubscriptionPlan(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(200), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    product_id: int = Field(sa_column=Column(ForeignKey("product.id", ondelete="CASCADE"), index=True, nullable=False))
    type: str = Field(sa_column=Column(String(32), nullable=False))
    quantity: int = Field(sa_column=Column(Integer(), nullable=False))
    price_per_unit: float = Field(sa_column=Column(Float(), nullable=False))
    total_price: float = Field(sa_column=Column(Float(), nullable=False))
    discount_percentage: Optional[float] = Field(default=None, sa_column=Column(Float(), nullable=True))
    delivery_days: List[int] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))  # 0-6, Sunday first
    duration: int = Field(sa_column=Column(Integer(), nullable=False))  # days
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))


class UserSubscription(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False))
    plan_id: int = Field(sa_column=Column(ForeignKey("subscriptionplan.id", ondelete="RESTRICT"), index=True, nullable=False))
    delivery_address_id: int = Field(sa_column=Column(ForeignKey("address.id", ondelete="RESTRICT"), nullable=False))

    start_date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    end_date: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    status: str = Field(default=SubscriptionStatus.ACTIVE.value,
        sa_column=Column(String(32), index=True, nullable=False, default=SubscriptionStatus.ACTIVE.value))
    total_amount: float = Field(sa_column=Column(Float(), nullable=False))
    is_paid: bool = Field(default=False)

    paused_from: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    paused_until: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    skipped_deliveries: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))

    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    cancellation_reason: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))

    created_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
