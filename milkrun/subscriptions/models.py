from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from milkrun.schema.full_schema import SubscriptionType


class PlanCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200, examples=["Daily Milk Subscription"])
    description: Optional[str] = None
    product_id: int
    type: SubscriptionType
    quantity: int = Field(..., ge=1, description="units per delivery")
    price_per_unit: float = Field(..., ge=0)
    total_price: float = Field(..., ge=0, description="price for the whole period")
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    delivery_days: List[int] = Field(default_factory=list, description="0-6, Sunday first")
    duration: int = Field(..., ge=1, description="days")
    is_active: bool = True


class PlanUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[SubscriptionType] = None
    quantity: Optional[int] = Field(None, ge=1)
    price_per_unit: Optional[float] = Field(None, ge=0)
    total_price: Optional[float] = Field(None, ge=0)
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    delivery_days: Optional[List[int]] = None
    duration: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None

    model_config = {"extra": "forbid"}


class SubscribeIn(BaseModel):
    plan_id: int
    delivery_address_id: int
    start_date: Optional[datetime] = None


class PauseIn(BaseModel):
    paused_until: datetime


class CancelSubscriptionIn(BaseModel):
    reason: Optional[str] = Field(None, max_length=500)
