from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.clock import utcnow
from shared.config.database import Base


class Refund(Base):
    __tablename__ = "refunds"

    id = Column(Integer, primary_key=True, index=True)
    order_pk = Column(Integer, ForeignKey("orders.id"), unique=True, nullable=False) # zero-or-one per order
    amount = Column(Float, nullable=False)
    reason = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="Pending") # Pending, Processed
    created_at = Column(DateTime, nullable=False, default=utcnow)
    processed_at = Column(DateTime, nullable=True)

    order = relationship("Order", back_populates="refund", lazy="selectin")
