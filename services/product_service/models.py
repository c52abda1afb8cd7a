from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text

from shared.clock import utcnow
from shared.config.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(64), nullable=False, index=True)
    price = Column(Float, nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String(512), nullable=True)
    specifications = Column(Text, nullable=True)
    warranty = Column(String(64), nullable=True)
    stock = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0.0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
