from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class ProfileUpdateIn(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = Field(None, max_length=128)
    last_name: Optional[str] = Field(None, max_length=128)
