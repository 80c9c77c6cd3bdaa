from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlmodel import Column, SQLModel, Field
from milkrun.common.utils import now


class Category(SQLModel, table=True):

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(200), unique=True, nullable=False))
    slug: str = Field(sa_column=Column(String(220), unique=True, index=True, nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(String(1000), nullable=True))
    image: Optional[str] = Field(default=None, sa_column=Column(String(1024), nullable=True))
    is_active: bool = Field(default=True)
    sort_order: int = Field(default=0, sa_column=Column(Integer(), nullable=False, default=0))
    created_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))
    updated_at: datetime = Field(default_factory=now, sa_column=Column(DateTime(timezone=True), nullable=False, default=now))


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(255), nullable=False))
    slug: str = Field(sa_column=Column(String(280), unique=True, index=True, nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text(), nullable=True))
    category_id: int = Field(sa_column=Column(ForeignKey("category.id", ondelete="RESTRICT"), index=True, nullable=False))

    price: float = Field(sa_column=Column(Float(), nullable=False))
    discounted_price: Optional[float] = Field(default=0, sa_column=Column(Float(), nullable=True, default=0))
    unit: str = Field(sa_column=Column(String(32), nullable=False))   # "1L", "500ml", "1kg"

    images: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    is_available: bool = Field(default=True)
    is_active: bool = Field(default=True)
    stock_quantity: int = Field(default=0, sa_column=Column(Integer(), nullable=False, default=0))
    nutritional_info: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON, nullable=True))
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False, default=list))
    is_featured: bool = Field(default=False)
    sort_order: int = Field(default=0, sa_column=Column(Integer(), nullable=False, default=0))

    created_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False,default=now))
    updated_at: datetime = Field(default_factory=now,
        sa_column=Column(DateTime(timezone=True), nullable=False,default=now))
