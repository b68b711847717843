from decimal import Decimal
from typing import Annotated, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, PlainSerializer, computed_field

from shared.core.config import settings
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.inventory_enum import InventoryUnit, ItemType, StockStatus

# Quantities stay Decimal inside the service and go out as JSON numbers
Quantity = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def stock_status_for(quantity: Decimal, threshold: Optional[int] = None) -> StockStatus:
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    if quantity <= 0:
        return StockStatus.empty
    if quantity < threshold:
        return StockStatus.low_stock
    return StockStatus.in_stock


# ---------------- Create / Update ----------------
class InventoryItemCreate(EmptyStringModel):
    item_type: ItemType = ItemType.gold
    quantity: Decimal
    unit: InventoryUnit = InventoryUnit.grams
    description: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None


class InventoryItemUpdate(EmptyStringModel):
    item_type: Optional[ItemType] = None
    unit: Optional[InventoryUnit] = None
    description: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    # Accepted only so it can be rejected explicitly; balances move through transactions
    quantity: Optional[Decimal] = None


# ---------------- Output ----------------
class InventoryItemOut(BaseModel):
    id: UUID
    org_id: UUID
    item_type: str
    quantity: Quantity
    unit: str
    description: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def stock_status(self) -> StockStatus:
        return stock_status_for(self.quantity)

    model_config = {"from_attributes": True}


class InventoryItemResponse(BaseModel):
    inventory: InventoryItemOut


class InventoryListResponse(BaseModel):
    inventory: List[InventoryItemOut]


# ---------------- Summary ----------------
class InventoryTotal(BaseModel):
    item_type: str
    unit: str
    quantity: Quantity
    items: int


class InventorySummaryOut(BaseModel):
    totals: List[InventoryTotal]
    status_counts: Dict[str, int]
    total_gold_grams: Quantity
