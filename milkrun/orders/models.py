from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field
from milkrun.schema.full_schema import OrderStatus


class OrderCreateIn(BaseModel):
    delivery_address_id: int
    delivery_date: Optional[datetime] = None
    notes: Optional[str] = Field(None, max_length=1000)


class CancelOrderIn(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)


class OrderStatusIn(BaseModel):
    status: OrderStatus


class AssignDeliveryIn(BaseModel):
    delivery_boy_id: UUID = Field(..., description="public id of the delivery boy")
