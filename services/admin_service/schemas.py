from pydantic import BaseModel, Field, field_validator


class OrderStatusUpdate(BaseModel):
    # Open vocabulary: any non-empty status is accepted under the permissive policy
    order_status: str = Field(max_length=32)

    @field_validator("order_status")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Status is required")
        return value


class StatsResponse(BaseModel):
    total_orders: int
    total_revenue: float
    pending_orders: int
    delivered_orders: int
