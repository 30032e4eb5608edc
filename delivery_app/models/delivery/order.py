from sqlalchemy import Column, String, ForeignKey, Text, DateTime, Enum, Numeric, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from delivery_app.models.base import Base
import uuid, enum


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    READY = "ready"
    PICKED_UP = "picked_up"
    ON_WAY = "on_way"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Statuses a driver may set on an order they own. Deliberately unordered:
# a driver can move between any of these.
DRIVER_SETTABLE_STATUSES = {OrderStatus.READY, OrderStatus.PICKED_UP, OrderStatus.DELIVERED}

# Orders a driver is still working on
ACTIVE_DRIVER_STATUSES = {OrderStatus.PREPARING, OrderStatus.READY, OrderStatus.PICKED_UP, OrderStatus.ON_WAY}


class Order(Base):
    """Customer order tracked through the delivery lifecycle"""
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number = Column(String, nullable=True)
    customer_name = Column(String, nullable=False)
    customer_phone = Column(String, nullable=False)
    delivery_address = Column(String, nullable=False)
    items = Column(Text, nullable=False, default="[]")  # JSON list
    total_amount = Column(Numeric(10, 2), nullable=False, default=0)

    restaurant_id = Column(String, ForeignKey("restaurants.id"), nullable=True)
    driver_id = Column(String, ForeignKey("drivers.id"), nullable=True)  # NULL = unassigned
    status = Column(
        Enum(OrderStatus, name="order_status", native_enum=False,
             values_callable=lambda statuses: [s.value for s in statuses]),
        nullable=False,
        default=OrderStatus.PENDING,
    )

    # Always naive UTC
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    accepted_at = Column(DateTime, nullable=True)
    delivered_at = Column(DateTime, nullable=True)

    delivery_location = Column(String, nullable=True)
    driver_earnings = Column(Numeric(10, 2), nullable=True)

    driver = relationship("Driver", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")

    __table_args__ = (
        Index("idx_orders_driver", "driver_id"),
        Index("idx_orders_status", "status", "driver_id"),
        Index("idx_orders_customer_phone", "customer_phone"),
    )
