from io import BytesIO
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from typing import List, Optional
from routes.notifications import notify_order_status_update
from models.billing import PaymentStatus
from schemas.billing import BillGenerate, BillInDB, PaymentConfirmation, PaymentRequest
from services.core import RestaurantCore
from utils.dependencies import get_core
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/bills", tags=["billing"])


@router.get("", response_model=List[BillInDB])
async def list_bills(
    payment_status: Optional[PaymentStatus] = Query(None, alias="paymentStatus"),
    core: RestaurantCore = Depends(get_core)
):
    return core.billing.list(payment_status)


@router.post("/generate", response_model=BillInDB, status_code=status.HTTP_201_CREATED)
async def generate_bill(request: BillGenerate, core: RestaurantCore = Depends(get_core)):
    return core.billing.generate(request.order_id, request.payment_method)


@router.get("/{bill_id}", response_model=BillInDB)
async def get_bill(bill_id: str, core: RestaurantCore = Depends(get_core)):
    return core.billing.get(bill_id)


@router.get("/{bill_id}/receipt")
async def download_receipt(bill_id: str, core: RestaurantCore = Depends(get_core)):
    pdf = core.billing.render_receipt(bill_id)
    headers = {
        'Content-Disposition': f'attachment; filename="receipt_{bill_id}.pdf"'
    }
    return StreamingResponse(BytesIO(pdf), media_type='application/pdf', headers=headers)


@router.post("/{bill_id}/pay", response_model=PaymentConfirmation)
async def pay_bill(
    bill_id: str,
    payment: Optional[PaymentRequest] = None,
    core: RestaurantCore = Depends(get_core)
):
    confirmation = core.billing.pay(bill_id, payment.payment_method if payment else None)
    bill = core.billing.get(bill_id)
    await notify_order_status_update(core.orders.get(bill.order_id))
    return confirmation
