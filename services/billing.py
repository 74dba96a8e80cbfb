import logging
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Tuple
from datetime import datetime
from models.billing import PaymentMethod, PaymentStatus
from models.order_management import OrderStatus
from schemas.base import round_money
from schemas.billing import BillInDB, PaymentConfirmation
from schemas.order_management import OrderItemInDB
from services.exceptions import NotFound, ValidationError
from services.orders import OrderLifecycleManager
from storage.base import EntityStore
from utils.pdf_generator import generate_receipt_pdf

logger = logging.getLogger(__name__)


def compute_totals(items: Iterable[OrderItemInDB], tax_rate: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
    """Subtotal, tax and total for a list of order items, each rounded half-up to cents."""
    subtotal = round_money(sum((Decimal(item.price) * item.quantity for item in items), Decimal("0")))
    tax = round_money(subtotal * tax_rate)
    return subtotal, tax, subtotal + tax


class BillingEngine:
    def __init__(self, store: EntityStore, orders: OrderLifecycleManager, id_generator,
                 clock: Callable[[], datetime], tax_rate: Decimal = Decimal("0.10")):
        self.store = store
        self.orders = orders
        self.new_id = id_generator
        self.clock = clock
        self.tax_rate = Decimal(tax_rate)

    def compute_totals(self, items: Iterable[OrderItemInDB]) -> Tuple[Decimal, Decimal, Decimal]:
        return compute_totals(items, self.tax_rate)

    def generate(self, order_id: str, payment_method: Optional[PaymentMethod] = None) -> BillInDB:
        with self.store.transaction():
            order = self.store.orders.get(order_id)
            if not order:
                raise NotFound(f"Order {order_id} not found")
            subtotal, tax, total = self.compute_totals(order.items)

            existing = self.store.bills.get_by_order(order_id)
            if existing:
                if existing.payment_status == PaymentStatus.PAID:
                    raise ValidationError(f"Order {order_id} already has a paid bill {existing.id}")
                # An issued bill keeps its snapshot; only the payment method may change
                if [item.model_dump() for item in existing.items] != [item.model_dump() for item in order.items]:
                    raise ValidationError(
                        f"Order {order_id} changed after bill {existing.id} was issued; settle that bill first"
                    )
                if payment_method and payment_method != existing.payment_method:
                    existing = self.store.bills.update(existing.id, {"payment_method": payment_method})
                logger.info(f"Bill {existing.id} already issued for order {order_id}")
                return existing

            bill = BillInDB(
                id=self.new_id("bill"),
                order_id=order.id,
                table_number=order.table_number,
                items=order.items,
                subtotal=subtotal,
                tax=tax,
                total=total,
                payment_method=payment_method or PaymentMethod.CASH,
                payment_status=PaymentStatus.PENDING,
                created_at=self.clock(),
            )
            created = self.store.bills.insert(bill)
        logger.info(f"Bill {created.id} generated for order {order_id}: total {created.total}")
        return created

    def pay(self, bill_id: str, payment_method: Optional[PaymentMethod] = None) -> PaymentConfirmation:
        """Settle a bill: the order becomes paid and its table is released, all or nothing."""
        with self.store.transaction():
            bill = self.get(bill_id)
            if bill.payment_status == PaymentStatus.PAID:
                raise ValidationError(f"Bill {bill_id} is already paid")
            if not self.store.orders.get(bill.order_id):
                raise NotFound(f"Order {bill.order_id} not found")
            method = payment_method or bill.payment_method
            self.orders.update_status(bill.order_id, OrderStatus.PAID)
            self.store.bills.update(bill_id, {"payment_status": PaymentStatus.PAID, "payment_method": method})
        logger.info(f"Bill {bill_id} paid by {method.value}")
        return PaymentConfirmation(
            success=True,
            message="Payment processed successfully",
            bill_id=bill_id,
            payment_method=method,
        )

    def get(self, bill_id: str) -> BillInDB:
        bill = self.store.bills.get(bill_id)
        if not bill:
            raise NotFound(f"Bill {bill_id} not found")
        return bill

    def get_by_order(self, order_id: str) -> BillInDB:
        bill = self.store.bills.get_by_order(order_id)
        if not bill:
            raise NotFound(f"No bill for order {order_id}")
        return bill

    def list(self, payment_status: Optional[PaymentStatus] = None) -> List[BillInDB]:
        if payment_status is None:
            return self.store.bills.list()
        return self.store.bills.list(payment_status=payment_status)

    def render_receipt(self, bill_id: str) -> bytes:
        bill = self.get(bill_id)
        names = {item.id: item.name for item in self.store.menu_items.list()}
        return generate_receipt_pdf(bill, names, self.tax_rate).getvalue()
