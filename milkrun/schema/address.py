from datetime import datetime
from typing import Optional
from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlmodel import SQLModel, Field
from milkrun.common.utils import now

class Address(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(sa_column=Column(ForeignKey("users.id", ondelete="CASCADE"),
            index=True,
            nullable=False))
    full_name: str = Field(sa_column=Column(String(128), nullable=False))
    phone: str = Field(sa_column=Column(String(20), nullable=False))
    address_line1: str = Field(sa_column=Column(String(255), nullable=False))
    address_line2: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    city: str = Field(sa_column=Column(String(128), nullable=False))
    state: str = Field(sa_column=Column(String(128), nullable=False))
    pincode: str = Field(sa_column=Column(String(12), nullable=False))
    landmark: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))
    type: str = Field(default="home", sa_column=Column(String(32), nullable=False, default="home"))
    is_default: bool = Field(default=False)
    created_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
