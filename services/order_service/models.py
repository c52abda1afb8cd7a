from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.clock import utcnow
from shared.config.database import Base


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        # Serves the cooldown lookup: same phone, newest first
        Index("ix_orders_phone_created_at", "customer_phone", "created_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(32), unique=True, nullable=False, index=True) # ORD-YYYYMMDD-NNNNN

    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(15), nullable=False)
    customer_email = Column(String(255), nullable=True)
    delivery_address = Column(Text, nullable=False)
    alternate_phone = Column(String(15), nullable=True)
    delivery_instructions = Column(Text, nullable=True)

    total_amount = Column(Float, nullable=False) # sum of item subtotals at creation
    payment_method = Column(String(16), nullable=False, default="COD")
    payment_status = Column(String(32), nullable=False, default="Pending")
    order_status = Column(String(32), nullable=False, default="Pending")

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    items = relationship(
        "OrderItem",
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )
    refund = relationship("Refund", back_populates="order", uselist=False, lazy="selectin")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_pk = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)

    # Snapshot of the product at purchase time; not linked to the live catalog row
    product_id = Column(Integer, nullable=False)
    product_name = Column(String(255), nullable=False)
    product_price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False)
    subtotal = Column(Float, nullable=False)

    order = relationship("Order", back_populates="items")
