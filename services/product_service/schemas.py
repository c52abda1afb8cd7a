from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=64)
    price: float = Field(ge=0)
    description: str = ""
    image_url: Optional[str] = None
    specifications: Optional[str] = None
    warranty: Optional[str] = None
    stock: int = Field(default=0, ge=0)
    rating: float = Field(default=0.0, ge=0, le=5)
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Partial update: only the fields sent are written."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    category: Optional[str] = Field(default=None, min_length=1, max_length=64)
    price: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    image_url: Optional[str] = None
    specifications: Optional[str] = None
    warranty: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    rating: Optional[float] = Field(default=None, ge=0, le=5)
    is_active: Optional[bool] = None


class ProductResponse(BaseModel):
    id: int
    name: str
    category: str
    price: float
    description: str
    image_url: Optional[str]
    specifications: Optional[str]
    warranty: Optional[str]
    stock: int
    rating: float
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
