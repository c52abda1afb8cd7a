from sqlalchemy import Column, DateTime, Integer, String

from shared.clock import utcnow
from shared.config.database import Base


class User(Base):
    """Back-office account. The storefront has a single admin."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
