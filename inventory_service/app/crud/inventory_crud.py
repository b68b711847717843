# app/crud/inventory_crud.py
import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Dict, List
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import (
    InsufficientQuantityError,
    NotFoundError,
    ValidationError,
)
from shared.helpers.db_helper import rollback_quietly, translate_db_error
from ..enum.inventory_enum import InventoryTransactionType, InventoryUnit, ItemType, StockStatus
from ..models.inventory import InventoryItem
from ..schemas.inventory_schemas import InventoryItemCreate, InventoryItemUpdate, stock_status_for

logger = logging.getLogger(__name__)

QUANTITY_STEP = Decimal("0.001")
# 11 integer digits, as in a decimal(14, 3) column
MAX_QUANTITY = Decimal("1e11")

GRAMS_PER_UNIT = {
    InventoryUnit.grams.value: Decimal("1"),
    InventoryUnit.kilograms.value: Decimal("1000"),
    InventoryUnit.ounces.value: Decimal("31.1034768"),  # troy ounce
    InventoryUnit.carats.value: Decimal("0.2"),
}


def require_positive_quantity(value) -> Decimal:
    """Parse ``value`` as a ledger quantity: finite, > 0, at most 3 decimals."""
    try:
        quantity = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationError("Quantity must be a number")

    if not quantity.is_finite():
        raise ValidationError("Quantity must be a number")
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    if quantity >= MAX_QUANTITY:
        raise ValidationError("Quantity is too large")
    if quantity != quantity.quantize(QUANTITY_STEP):
        raise ValidationError("Quantity supports at most 3 decimal places")
    return quantity


def _item_query(db: Session, item_id: UUID, org_id: UUID):
    return db.query(InventoryItem).filter(
        InventoryItem.id == item_id,
        InventoryItem.org_id == org_id  # tenant scope
    )


def get_inventory_items(db: Session, org_id: UUID) -> List[InventoryItem]:
    # No pagination, a single shop's stock list stays small
    return db.query(InventoryItem).filter(
        InventoryItem.org_id == org_id
    ).order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc()).all()


def get_inventory_item_by_id(db: Session, item_id: UUID, org_id: UUID) -> InventoryItem:
    db_item = _item_query(db, item_id, org_id).first()
    if not db_item:
        raise NotFoundError("Inventory item", item_id)
    return db_item


def create_inventory_item(db: Session, item: InventoryItemCreate, org_id: UUID) -> InventoryItem:
    item_data = item.column_values()
    item_data["quantity"] = require_positive_quantity(item.quantity)
    now = datetime.now(timezone.utc)
    db_item = InventoryItem(org_id=org_id, created_at=now, updated_at=now, **item_data)

    try:
        db.add(db_item)
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception("Failed to create inventory item")
        raise translate_db_error(e) from e

    db.refresh(db_item)
    logger.info(f"Inventory item {db_item.id} created: {db_item.quantity} {db_item.unit} of {db_item.item_type}")
    return db_item


def update_inventory_item(db: Session, item_id: UUID, item: InventoryItemUpdate, org_id: UUID) -> InventoryItem:
    """Edit descriptive fields. Balances only move through inventory transactions."""
    if "quantity" in item.model_fields_set:
        raise ValidationError(
            "Quantity cannot be edited directly, record a deposit or withdrawal instead")

    db_item = get_inventory_item_by_id(db, item_id, org_id)

    # Update only the fields that are provided
    for k, v in item.column_values(exclude_unset=True, exclude={"quantity"}).items():
        if k in ("item_type", "unit") and v is None:
            raise ValidationError(f"{k} cannot be empty")
        setattr(db_item, k, v)
    db_item.updated_at = datetime.now(timezone.utc)

    try:
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception(f"Failed to update inventory item {item_id}")
        raise translate_db_error(e) from e

    db.refresh(db_item)
    return db_item


def apply_balance_change(
    db: Session,
    item_id: UUID,
    org_id: UUID,
    transaction_type: InventoryTransactionType,
    quantity: Decimal,
) -> InventoryItem:
    """Move an item's balance by ``quantity`` in one conditional UPDATE.

    The non-negative guard is part of the UPDATE's WHERE clause, so a
    concurrent writer can never slip between the check and the write. Does not
    commit; the caller owns the surrounding transaction.
    """
    stmt = update(InventoryItem).where(
        InventoryItem.id == item_id,
        InventoryItem.org_id == org_id,
    )
    if transaction_type.decreases_stock:
        stmt = stmt.where(InventoryItem.quantity >= quantity).values(
            quantity=InventoryItem.quantity - quantity)
    else:
        stmt = stmt.values(quantity=InventoryItem.quantity + quantity)
    stmt = stmt.values(updated_at=datetime.now(timezone.utc))

    result = db.execute(stmt.execution_options(synchronize_session=False))

    if result.rowcount == 0:
        current = _item_query(db, item_id, org_id).populate_existing().first()
        if current is None:
            raise NotFoundError("Inventory item", item_id)
        raise InsufficientQuantityError(quantity, current.quantity, current.unit)

    return _item_query(db, item_id, org_id).populate_existing().one()


def get_inventory_summary(db: Session, org_id: UUID) -> Dict:
    rows = (
        db.query(
            InventoryItem.item_type,
            InventoryItem.unit,
            func.sum(InventoryItem.quantity).label("quantity"),
            func.count(InventoryItem.id).label("items"),
        )
        .filter(InventoryItem.org_id == org_id)
        .group_by(InventoryItem.item_type, InventoryItem.unit)
        .order_by(InventoryItem.item_type, InventoryItem.unit)
        .all()
    )

    totals = []
    total_gold_grams = Decimal("0")
    for row in rows:
        quantity = Decimal(row.quantity or 0).quantize(QUANTITY_STEP)
        totals.append({
            "item_type": row.item_type,
            "unit": row.unit,
            "quantity": quantity,
            "items": row.items,
        })
        # pieces have no weight and are left out of the gold total
        if row.item_type == ItemType.gold.value and row.unit in GRAMS_PER_UNIT:
            total_gold_grams += quantity * GRAMS_PER_UNIT[row.unit]

    status_counts = {status.value: 0 for status in StockStatus}
    quantities = db.query(InventoryItem.quantity).filter(InventoryItem.org_id == org_id).all()
    for (quantity,) in quantities:
        status_counts[stock_status_for(Decimal(quantity or 0)).value] += 1

    return {
        "totals": totals,
        "status_counts": status_counts,
        "total_gold_grams": total_gold_grams.quantize(QUANTITY_STEP),
    }
