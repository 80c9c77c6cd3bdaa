from datetime import datetime
from typing import Optional
from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlmodel import SQLModel, Field
from milkrun.common.utils import now


class OTPRequest(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    phone: str = Field(sa_column=Column(String(20), nullable=False, index=True))
    otp_hash: str = Field(sa_column=Column(Text(), nullable=False))  # hashed otp, never store plaintext
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    attempts: int = Field(default=0, sa_column=Column(Integer(), nullable=False, default=0))
    is_verified: bool = Field(default=False)
    created_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
