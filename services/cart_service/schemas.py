from typing import List, Optional

from pydantic import BaseModel, Field


class CartItemCreate(BaseModel):
    product_id: int
    product_name: str = Field(min_length=1, max_length=255)
    product_price: float = Field(ge=0)
    image_url: Optional[str] = None
    quantity: int = Field(default=1, ge=1)


class CartItemQuantity(BaseModel):
    quantity: int


class CartItemResponse(BaseModel):
    product_id: int
    product_name: str
    product_price: float
    image_url: Optional[str]
    quantity: int

    class Config:
        from_attributes = True


class CartResponse(BaseModel):
    cart_id: str
    items: List[CartItemResponse] = []
    total: float
    count: int
