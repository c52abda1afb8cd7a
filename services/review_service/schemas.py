from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from services.order_service.validators import validate_name

MIN_RATING = 1
MAX_RATING = 5
MIN_COMMENT_LENGTH = 10


class ReviewCreate(BaseModel):
    customer_name: str
    city: str
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: str = Field(max_length=2000)

    @field_validator("customer_name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not validate_name(value):
            raise ValueError("Name must be 3-100 characters, letters only")
        return value

    @field_validator("city")
    @classmethod
    def check_city(cls, value: str) -> str:
        value = value.strip()
        if not validate_name(value):
            raise ValueError("City must be 3-100 characters, letters only")
        return value

    @field_validator("comment")
    @classmethod
    def check_comment(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_COMMENT_LENGTH:
            raise ValueError("Comment must be at least 10 characters")
        return value


class ReviewModeration(BaseModel):
    is_approved: bool


class ReviewResponse(BaseModel):
    id: int
    product_id: int
    customer_name: str
    city: str
    rating: int
    comment: str
    created_at: datetime

    class Config:
        from_attributes = True


class AdminReviewResponse(ReviewResponse):
    is_approved: bool
