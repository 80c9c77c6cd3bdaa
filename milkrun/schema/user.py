from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID
from sqlalchemy import DateTime, String, Text, Uuid
from uuid6 import uuid7
from sqlmodel import Column, SQLModel, Field
from milkrun.common.utils import now


class UserRole(str, Enum):
    CUSTOMER = "customer"
    DELIVERY_BOY = "delivery_boy"
    ADMIN = "admin"


class Users(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)  #* optional only until the row is flushed
    public_id: UUID = Field(
        default_factory=uuid7,
        sa_column=Column(Uuid(as_uuid=True), unique=True, index=True, nullable=False)
    )
    phone: str = Field(sa_column=Column(String(20), unique=True, index=True, nullable=False))
    email: Optional[str] = Field(default=None, sa_column=Column(String(320), unique=True, index=True, nullable=True))
    password_hash: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    first_name: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    last_name: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))

    # fixed at creation, nothing updates it
    role: str = Field(sa_column=Column(String(32), index=True, nullable=False))

    is_active: bool = Field(default=True)
    is_phone_verified: bool = Field(default=False)
    is_email_verified: bool = Field(default=False)

    # hash of the latest refresh token, never the token itself
    refresh_token_hash: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=True), nullable=True))

    created_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False,default=now))
    updated_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False,default=now))
    deleted_at: Optional[datetime] = Field(default=None,
        sa_column=Column(DateTime(timezone=True)))
