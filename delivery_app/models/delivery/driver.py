from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from delivery_app.models.base import Base
import uuid


class Driver(Base):
    """Delivery agent who can be assigned orders"""
    __tablename__ = "drivers"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    email = Column(String, nullable=True)
    is_available = Column(Boolean, default=False, nullable=False)
    current_location = Column(String, nullable=True)  # free text or "lat,lng"
    last_active_at = Column(DateTime, nullable=True)

    orders = relationship("Order", back_populates="driver")
