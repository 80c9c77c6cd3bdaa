from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey
from sqlmodel import SQLModel, Field
from milkrun.common.utils import now


# one cart per user; line items are embedded values, not rows of their own
class Cart(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False))
    items: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    total_amount: float = Field(default=0, sa_column=Column(Float(), nullable=False, default=0))
    created_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
