from fastapi import APIRouter, Depends
import logging
from typing import List
from routes.notifications import notify_order_status_update
from models.order_management import OrderStatus
from schemas.order_management import KitchenAccept, OrderWithNames
from services.core import RestaurantCore
from utils.dependencies import get_core

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/kitchen", tags=["kitchen"])

# What the kitchen display shows
KITCHEN_STATUSES = [OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY]


@router.get("/orders", response_model=List[OrderWithNames])
async def list_kitchen_orders(core: RestaurantCore = Depends(get_core)):
    return [core.orders.with_item_names(order) for order in core.orders.list(KITCHEN_STATUSES)]


@router.post("/orders/{order_id}/accept", response_model=OrderWithNames)
async def accept_order(order_id: str, accept: KitchenAccept, core: RestaurantCore = Depends(get_core)):
    updated = core.orders.accept(order_id, accept.chef_id, accept.chef_name, accept.estimated_prep_time)
    logger.info(f"Order {order_id} accepted by chef {accept.chef_id}, ready in {accept.estimated_prep_time} min")
    await notify_order_status_update(updated)
    return core.orders.with_item_names(updated)


@router.post("/orders/{order_id}/complete", response_model=OrderWithNames)
async def complete_order(order_id: str, core: RestaurantCore = Depends(get_core)):
    updated = core.orders.complete(order_id)
    await notify_order_status_update(updated)
    return core.orders.with_item_names(updated)


@router.post("/orders/{order_id}/served", response_model=OrderWithNames)
async def serve_order(order_id: str, core: RestaurantCore = Depends(get_core)):
    updated = core.orders.serve(order_id)
    await notify_order_status_update(updated)
    return core.orders.with_item_names(updated)
