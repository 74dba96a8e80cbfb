from fastapi import APIRouter, Depends
from schemas.staff import LoginRequest, LoginResponse
from services.core import RestaurantCore
from utils.dependencies import get_core

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, core: RestaurantCore = Depends(get_core)):
    """Stub login for the staff dashboards; returns a signed token, nothing checks it yet."""
    return core.staff.authenticate(credentials.username, credentials.password, credentials.role)
