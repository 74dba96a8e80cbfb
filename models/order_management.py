from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Enum, Numeric
from sqlalchemy.orm import relationship
from utils.database import Base
import enum


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    SERVED = "served"
    COMPLETED = "completed"
    PAID = "paid"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(50), primary_key=True, index=True)
    table_number = Column(Integer, index=True, nullable=False)
    status = Column(Enum(OrderStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]), default=OrderStatus.PENDING, nullable=False)
    assigned_waiter = Column(String(50), index=True, nullable=True)
    customer_name = Column(String(100), nullable=True)
    assigned_chef = Column(String(50), nullable=True)
    chef_name = Column(String(100), nullable=True)
    estimated_prep_time = Column(Integer, nullable=True)
    start_time = Column(String(30), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(50), ForeignKey("orders.id", ondelete="CASCADE"), index=True, nullable=False)
    menu_item_id = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    price = Column(Numeric(10, 2), nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    order = relationship("Order", back_populates="items")
