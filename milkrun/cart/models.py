from pydantic import BaseModel, Field


class AddToCartIn(BaseModel):
    product_id: int
    quantity: int = Field(1, ge=1)


class UpdateQuantityIn(BaseModel):
    quantity: int = Field(..., description="0 or less removes the line")
