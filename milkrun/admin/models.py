from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AdminLoginIn(BaseModel):
    email: EmailStr
    password: str


class DeliveryBoyCreateIn(BaseModel):
    phone: str = Field(..., min_length=6, max_length=20)
    password: str = Field(..., min_length=6)
    email: Optional[EmailStr] = None
    first_name: str = Field(..., max_length=128)
    last_name: Optional[str] = Field(None, max_length=128)
