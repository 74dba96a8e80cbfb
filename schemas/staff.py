from typing import Optional
from models.staff import StaffRole
from schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[StaffRole] = None


class LoginResponse(CamelModel):
    success: bool = True
    username: str
    role: StaffRole
    name: str
    id: str
    token: str


class StaffInDB(CamelModel):
    id: str
    username: str
    password: str
    role: StaffRole
    name: str


class WaiterStats(CamelModel):
    active_tables: int
    pending_orders: int
    today_revenue: float
    total_tables_served: int
