from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from delivery_app.models.base import Base
import uuid


class Restaurant(Base):
    __tablename__ = "restaurants"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)

    orders = relationship("Order", back_populates="restaurant")
