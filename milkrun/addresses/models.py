from typing import Optional
from pydantic import BaseModel, Field


class AddressIn(BaseModel):
    full_name: str = Field(..., max_length=128)
    phone: str = Field(..., min_length=6, max_length=20)
    address_line1: str = Field(..., max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: str = Field(..., max_length=128)
    state: str = Field(..., max_length=128)
    pincode: str = Field(..., min_length=4, max_length=12)
    landmark: Optional[str] = Field(None, max_length=255)
    type: str = Field("home", max_length=32)
    is_default: bool = False


class AddressUpdateIn(BaseModel):
    full_name: Optional[str] = Field(None, max_length=128)
    phone: Optional[str] = Field(None, min_length=6, max_length=20)
    address_line1: Optional[str] = Field(None, max_length=255)
    address_line2: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=128)
    state: Optional[str] = Field(None, max_length=128)
    pincode: Optional[str] = Field(None, min_length=4, max_length=12)
    landmark: Optional[str] = Field(None, max_length=255)
    type: Optional[str] = Field(None, max_length=32)
    is_default: Optional[bool] = None
