from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ProductCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: int
    price: float = Field(..., ge=0)
    discounted_price: Optional[float] = Field(None, ge=0)
    unit: str = Field(..., max_length=32, examples=["1L", "500ml"])
    images: List[str] = Field(default_factory=list)
    is_available: bool = True
    is_active: bool = True
    stock_quantity: int = Field(0, ge=0)
    nutritional_info: Optional[Dict[str, Any]] = None
    tags: List[str] = Field(default_factory=list)
    is_featured: bool = False
    sort_order: int = 0


class ProductUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category_id: Optional[int] = None
    price: Optional[float] = Field(None, ge=0)
    discounted_price: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = Field(None, max_length=32)
    images: Optional[List[str]] = None
    is_available: Optional[bool] = None
    is_active: Optional[bool] = None
    stock_quantity: Optional[int] = Field(None, ge=0)
    nutritional_info: Optional[Dict[str, Any]] = None
    tags: Optional[List[str]] = None
    is_featured: Optional[bool] = None
    sort_order: Optional[int] = None

    model_config = {"extra": "forbid"}   # unknown fields are a 422
