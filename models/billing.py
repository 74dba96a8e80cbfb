from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, Numeric
from utils.database import Base
import enum


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    DIGITAL = "digital"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"


class Bill(Base):
    __tablename__ = "bills"

    id = Column(String(50), primary_key=True, index=True)
    order_id = Column(String(50), unique=True, index=True, nullable=False)
    table_number = Column(Integer, nullable=False)
    # JSON snapshot of the order items at generation time
    items = Column(Text, nullable=False, default="[]")
    subtotal = Column(Numeric(10, 2), nullable=False)
    tax = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(Enum(PaymentMethod, native_enum=False, values_callable=lambda e: [m.value for m in e]), default=PaymentMethod.CASH)
    payment_status = Column(Enum(PaymentStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]), default=PaymentStatus.PENDING, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
