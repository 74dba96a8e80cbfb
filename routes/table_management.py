from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from models.table_management import TableStatus
from schemas.table_management import TableAssign, TableCreate, TableInDB, TableUpdate
from services.core import RestaurantCore
from utils.dependencies import get_core
import logging


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tables", tags=["tables"])


@router.get("", response_model=List[TableInDB])
async def list_tables(table_status: Optional[TableStatus] = Query(None, alias="status"), core: RestaurantCore = Depends(get_core)):
    tables = core.tables.list(status=table_status)
    logger.debug(f"Retrieved {len(tables)} tables")
    return tables


@router.post("", response_model=TableInDB, status_code=status.HTTP_201_CREATED)
async def create_table(table: TableCreate, core: RestaurantCore = Depends(get_core)):
    return core.tables.create(table)


@router.get("/available", response_model=List[TableInDB])
async def list_available_tables(core: RestaurantCore = Depends(get_core)):
    return core.tables.list_available()


@router.get("/{table_id}", response_model=TableInDB)
async def get_table(table_id: str, core: RestaurantCore = Depends(get_core)):
    return core.tables.get(table_id)


@router.put("/{table_id}", response_model=TableInDB)
async def update_table(table_id: str, table_update: TableUpdate, core: RestaurantCore = Depends(get_core)):
    return core.tables.set_status(table_id, table_update.model_dump(exclude_unset=True))


@router.put("/{table_id}/status", response_model=TableInDB)
async def update_table_status(table_id: str, table_update: TableUpdate, core: RestaurantCore = Depends(get_core)):
    return core.tables.set_status(table_id, table_update.model_dump(exclude_unset=True))


@router.post("/{table_id}/assign", response_model=TableInDB)
async def assign_waiter(table_id: str, assignment: TableAssign, core: RestaurantCore = Depends(get_core)):
    return core.tables.assign(table_id, assignment.waiter_id)


@router.post("/{table_id}/assist", response_model=TableInDB)
async def request_assistance(table_id: str, core: RestaurantCore = Depends(get_core)):
    return core.tables.mark_needs_assistance(table_id)


@router.post("/{table_id}/release", response_model=TableInDB)
async def release_table(table_id: str, core: RestaurantCore = Depends(get_core)):
    return core.tables.release_by_id(table_id)


@router.delete("/{table_id}")
async def delete_table(table_id: str, core: RestaurantCore = Depends(get_core)):
    core.tables.delete(table_id)
    return {"success": True, "message": "Table deleted successfully"}
