# app/router/inventory_transactions_router.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_ledger_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.db_helper import run_with_retry
from ..crud import inventory_transactions_crud as crud
from ..schemas.inventory_transactions_schemas import (
    InventoryTransactionCreate,
    InventoryTransactionListResponse,
    InventoryTransactionResponse,
)

# Registered before the inventory router so "/inventory/transactions" never
# matches "/inventory/{item_id}"
router = APIRouter(prefix="/inventory/transactions",
                   tags=["inventory_transactions"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=InventoryTransactionListResponse)
def read_transactions(
    inventory_id: Optional[UUID] = None,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"transactions": crud.get_inventory_transactions(db, current_user.tenant_id, inventory_id)}


@router.post("", response_model=InventoryTransactionResponse)
def create_transaction(
    payload: InventoryTransactionCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    transaction, updated_item = run_with_retry(
        lambda: crud.record_inventory_transaction(db, payload, current_user), db)
    return {"transaction": transaction, "updatedInventory": updated_item}
