from typing import Optional
from pydantic import BaseModel, Field


class CategoryCreateIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class CategoryUpdateIn(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    image: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None

    model_config = {"extra": "forbid"}
