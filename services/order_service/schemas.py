from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from .validators import (
    MAX_ITEM_QUANTITY,
    MIN_ITEM_QUANTITY,
    validate_address,
    validate_email,
    validate_name,
    validate_phone,
)


class OrderItemCreate(BaseModel):
    product_id: int
    product_name: str = Field(min_length=1, max_length=255)
    product_price: float = Field(ge=0)
    quantity: int = Field(ge=MIN_ITEM_QUANTITY, le=MAX_ITEM_QUANTITY)


class OrderCreate(BaseModel):
    customer_name: str
    customer_phone: str
    customer_email: Optional[str] = None
    delivery_address: str
    alternate_phone: Optional[str] = None
    delivery_instructions: Optional[str] = Field(default=None, max_length=500)
    items: List[OrderItemCreate] = Field(min_length=1)
    total_amount: Optional[float] = None # must match the items when sent

    @field_validator("customer_name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not validate_name(value):
            raise ValueError("Name must be 3-100 letters and spaces")
        return value

    @field_validator("customer_phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        value = value.strip()
        if not validate_phone(value):
            raise ValueError("Enter a valid 10-digit mobile number")
        return value

    @field_validator("alternate_phone")
    @classmethod
    def check_alternate_phone(cls, value: Optional[str]) -> Optional[str]:
        value = (value or "").strip()
        if not value:
            return None
        if not validate_phone(value):
            raise ValueError("Enter a valid 10-digit mobile number")
        return value

    @field_validator("customer_email")
    @classmethod
    def check_email(cls, value: Optional[str]) -> Optional[str]:
        value = (value or "").strip()
        if not value:
            return None
        if not validate_email(value):
            raise ValueError("Enter a valid email address")
        return value

    @field_validator("delivery_address")
    @classmethod
    def check_address(cls, value: str) -> str:
        value = value.strip()
        if not validate_address(value):
            raise ValueError("Address must be at least 20 characters and include a 6-digit pincode")
        return value

    @field_validator("delivery_instructions")
    @classmethod
    def blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        return (value or "").strip() or None

    def computed_total(self) -> float:
        return round(sum(item.product_price * item.quantity for item in self.items), 2)


class CooldownCheck(BaseModel):
    phone: str = Field(min_length=1, max_length=15)


class CooldownResponse(BaseModel):
    success: bool = True


class OrderItemResponse(BaseModel):
    product_id: int
    product_name: str
    product_price: float
    quantity: int
    subtotal: float

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_id: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str]
    delivery_address: str
    alternate_phone: Optional[str]
    delivery_instructions: Optional[str]
    total_amount: float
    payment_method: str
    payment_status: str
    order_status: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = []

    class Config:
        from_attributes = True


class TimelineStepResponse(BaseModel):
    key: str
    label: str
    description: str
    completed: bool
    current: bool

    class Config:
        from_attributes = True


class TrackingResponse(BaseModel):
    order_id: str
    status: str
    is_refund: bool
    current_step: int
    steps: List[TimelineStepResponse] = []
    notice: Optional[str] = None
