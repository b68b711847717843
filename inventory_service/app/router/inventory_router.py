# app/router/inventory_router.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_ledger_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.db_helper import run_with_retry
from ..crud import inventory_crud as crud
from ..schemas.inventory_schemas import (
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    InventoryListResponse,
    InventorySummaryOut,
)

router = APIRouter(prefix="/inventory",
                   tags=["inventory"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=InventoryListResponse)
def read_items(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"inventory": crud.get_inventory_items(db, current_user.tenant_id)}


@router.get("/summary", response_model=InventorySummaryOut)
def read_summary(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_inventory_summary(db, current_user.tenant_id)


@router.get("/{item_id}", response_model=InventoryItemResponse)
def read_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"inventory": crud.get_inventory_item_by_id(db, item_id, current_user.tenant_id)}


@router.post("", response_model=InventoryItemResponse)
def create_item(
    item: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    db_item = run_with_retry(
        lambda: crud.create_inventory_item(db, item, current_user.tenant_id), db)
    return {"inventory": db_item}


# ---------------- Edit descriptive fields (quantity excluded) ----------------


@router.put("/{item_id}", response_model=InventoryItemResponse)
def update_item(
    item_id: UUID,
    item: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"inventory": crud.update_inventory_item(db, item_id, item, current_user.tenant_id)}
