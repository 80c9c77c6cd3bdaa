from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlmodel import SQLModel, Field
from milkrun.common.utils import now

class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


TERMINAL_ORDER_STATUSES = (OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value)


class Orders(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_number: str = Field(sa_column=Column(String(40), unique=True, index=True, nullable=False))
    customer_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False))

    # immutable snapshot of the cart lines at creation time
    items: List[Dict[str, Any]] = Field(sa_column=Column(JSON, nullable=False))
    total_amount: float = Field(sa_column=Column(Float(), nullable=False))

    status: str = Field(default=OrderStatus.PENDING.value,
        sa_column=Column(String(32), index=True, nullable=False, default=OrderStatus.PENDING.value))
    payment_status: str = Field(default=PaymentStatus.PENDING.value,
        sa_column=Column(String(32), nullable=False, default=PaymentStatus.PENDING.value))

    delivery_address_id: int = Field(sa_column=Column(ForeignKey("address.id", ondelete="RESTRICT"), index=True, nullable=False))
    delivery_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    assigned_delivery_boy_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("users.id", ondelete="SET NULL"), index=True, nullable=True))
    subscription_id: Optional[int] = Field(default=None,
        sa_column=Column(ForeignKey("usersubscription.id", ondelete="SET NULL"), nullable=True))

    delivered_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    cancelled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))
    cancellation_reason: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))

    created_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
