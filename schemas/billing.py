from typing import List, Optional
from models.billing import PaymentMethod, PaymentStatus
from schemas.base import CamelModel, Money, UtcDateTime
from schemas.order_management import OrderItemInDB


class BillGenerate(CamelModel):
    order_id: str
    payment_method: Optional[PaymentMethod] = None


class PaymentRequest(CamelModel):
    payment_method: Optional[PaymentMethod] = None


class PaymentConfirmation(CamelModel):
    success: bool
    message: str
    bill_id: str
    payment_method: PaymentMethod


class BillInDB(CamelModel):
    id: str
    order_id: str
    table_number: int
    items: List[OrderItemInDB]
    subtotal: Money
    tax: Money
    total: Money
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.PENDING
    created_at: UtcDateTime
