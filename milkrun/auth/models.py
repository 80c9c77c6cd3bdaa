from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class OTPRequestIn(BaseModel):
    phone: str = Field(..., min_length=6, max_length=20, examples=["9876543210"])


class OTPVerifyIn(BaseModel):
    phone: str = Field(..., min_length=6, max_length=20)
    otp: str = Field(..., min_length=4, max_length=10)
    first_name: Optional[str] = Field(None, max_length=128)
    last_name: Optional[str] = Field(None, max_length=128)


class LoginIn(BaseModel):
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    password: str = Field(...)


class RefreshIn(BaseModel):
    refresh_token: str = Field(...)
