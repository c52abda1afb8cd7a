from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RefundStatus(str, Enum):
    PENDING = "Pending"
    PROCESSED = "Processed"


class RefundCreate(BaseModel):
    order_id: str # human-facing ORD-... id
    amount: Optional[float] = Field(default=None, gt=0) # defaults to the order total
    reason: Optional[str] = Field(default=None, max_length=1000)


class RefundUpdate(BaseModel):
    status: RefundStatus


class RefundResponse(BaseModel):
    id: int
    order_id: str
    customer_name: str
    amount: float
    reason: Optional[str]
    status: str
    created_at: datetime
    processed_at: Optional[datetime]
