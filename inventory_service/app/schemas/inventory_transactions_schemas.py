from decimal import Decimal
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from pydantic import BaseModel

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from .inventory_schemas import InventoryItemOut, Quantity


class InventoryTransactionCreate(EmptyStringModel):
    inventory_id: UUID
    # Checked by the recorder so an unknown kind is a ledger validation error
    transaction_type: str
    quantity: Decimal
    dealer_id: Optional[UUID] = None
    employee_id: Optional[UUID] = None
    description: Optional[str] = None
    notes: Optional[str] = None


# ---------------- Joined references ----------------
class InventoryRef(BaseModel):
    id: UUID
    item_type: str
    quantity: Quantity
    unit: str
    description: Optional[str] = None
    location: Optional[str] = None

    model_config = {"from_attributes": True}


class DealerRef(BaseModel):
    id: UUID
    name: str
    company: Optional[str] = None
    phone: Optional[str] = None

    model_config = {"from_attributes": True}


class EmployeeRef(BaseModel):
    id: UUID
    name: str
    position: Optional[str] = None
    department: Optional[str] = None

    model_config = {"from_attributes": True}


class InventoryTransactionOut(BaseModel):
    id: UUID
    org_id: UUID
    inventory_id: UUID
    transaction_type: str
    quantity: Quantity
    dealer_id: Optional[UUID] = None
    employee_id: Optional[UUID] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    transaction_date: Optional[date] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None

    inventory: Optional[InventoryRef] = None
    dealer: Optional[DealerRef] = None
    employee: Optional[EmployeeRef] = None

    model_config = {"from_attributes": True}


class InventoryTransactionResponse(BaseModel):
    transaction: InventoryTransactionOut
    updatedInventory: InventoryItemOut


class InventoryTransactionListResponse(BaseModel):
    transactions: List[InventoryTransactionOut]
