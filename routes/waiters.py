from fastapi import APIRouter, Depends
from schemas.staff import WaiterStats
from services.core import RestaurantCore
from utils.dependencies import get_core

router = APIRouter(prefix="/api/waiters", tags=["waiters"])


@router.get("/{waiter_id}/stats", response_model=WaiterStats)
async def get_waiter_stats(waiter_id: str, core: RestaurantCore = Depends(get_core)):
    return core.waiter_stats.stats(waiter_id)
