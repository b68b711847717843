# app/crud/inventory_transactions_crud.py
"""
Transaction recorder: the only code path that changes an inventory balance.

A deposit adds to the item's quantity; a withdraw or a transfer (goods sent to
a dealer) subtracts from it. A transfer does not credit any destination stock,
the dealer reference only records where the goods went.

The balance change and the transaction row are written in one database
transaction. The balance change is a single conditional UPDATE, so two
requests racing on the same item cannot both pass the non-negative check.
"""
import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from shared.core.exceptions import InventoryLedgerError, NotFoundError, ValidationError
from shared.core.schemas import UserToken
from shared.helpers.db_helper import rollback_quietly, translate_db_error
from ..enum.inventory_enum import InventoryTransactionType, PartyStatus
from ..models.inventory import InventoryItem
from ..models.inventory_transactions import InventoryTransaction
from ..schemas.inventory_transactions_schemas import InventoryTransactionCreate
from . import inventory_crud
from .dealers_crud import get_dealer_by_id
from .employees_crud import get_employee_by_id

logger = logging.getLogger(__name__)


def parse_transaction_type(value) -> InventoryTransactionType:
    try:
        return InventoryTransactionType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in InventoryTransactionType)
        raise ValidationError(f"Transaction type must be one of: {allowed}")


def _resolve_counterparties(
    db: Session,
    transaction_type: InventoryTransactionType,
    dealer_id: Optional[UUID],
    employee_id: Optional[UUID],
    org_id: UUID,
):
    if transaction_type == InventoryTransactionType.transfer and dealer_id is None:
        raise ValidationError("A dealer is required for a transfer")

    if dealer_id is not None:
        dealer = get_dealer_by_id(db, dealer_id, org_id)
        if dealer.status != PartyStatus.active.value:
            raise ValidationError("Dealer is not active")

    if employee_id is not None:
        employee = get_employee_by_id(db, employee_id, org_id)
        if employee.status != PartyStatus.active.value:
            raise ValidationError("Employee is not active")


def _transactions_query(db: Session, org_id: UUID):
    return db.query(InventoryTransaction).options(
        joinedload(InventoryTransaction.inventory),
        joinedload(InventoryTransaction.dealer),
        joinedload(InventoryTransaction.employee),
    ).filter(InventoryTransaction.org_id == org_id)


def get_inventory_transactions(
    db: Session, org_id: UUID, inventory_id: Optional[UUID] = None
) -> List[InventoryTransaction]:
    query = _transactions_query(db, org_id)
    if inventory_id is not None:
        query = query.filter(InventoryTransaction.inventory_id == inventory_id)
    return query.order_by(
        InventoryTransaction.created_at.desc(), InventoryTransaction.id.desc()
    ).all()


def get_inventory_transaction_by_id(db: Session, transaction_id: UUID, org_id: UUID) -> InventoryTransaction:
    transaction = _transactions_query(db, org_id).filter(
        InventoryTransaction.id == transaction_id
    ).first()
    if not transaction:
        raise NotFoundError("Inventory transaction", transaction_id)
    return transaction


def record_inventory_transaction(
    db: Session,
    payload: InventoryTransactionCreate,
    current_user: UserToken,
) -> Tuple[InventoryTransaction, InventoryItem]:
    """Validate, apply and persist one transaction.

    Returns the stored transaction (with inventory, dealer and employee
    loaded) and the item with its new balance. On any error nothing is
    written.
    """
    org_id = current_user.tenant_id
    transaction_type = parse_transaction_type(payload.transaction_type)
    quantity = inventory_crud.require_positive_quantity(payload.quantity)

    try:
        _resolve_counterparties(db, transaction_type, payload.dealer_id, payload.employee_id, org_id)

        updated_item = inventory_crud.apply_balance_change(
            db, payload.inventory_id, org_id, transaction_type, quantity)

        now = datetime.now(timezone.utc)
        transaction = InventoryTransaction(
            org_id=org_id,
            inventory_id=payload.inventory_id,
            transaction_type=transaction_type.value,
            quantity=quantity,
            dealer_id=payload.dealer_id,
            employee_id=payload.employee_id,
            description=payload.description,
            notes=payload.notes,
            transaction_date=date.today(),
            created_by=current_user.user_id,
            created_at=now,
        )
        db.add(transaction)
        db.commit()
    except InventoryLedgerError:
        rollback_quietly(db)
        raise
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception(
            f"Failed to record {transaction_type.value} on inventory item {payload.inventory_id}")
        raise translate_db_error(e) from e

    db.refresh(updated_item)
    logger.info(
        f"Recorded {transaction_type.value} of {quantity} on inventory item {updated_item.id}, "
        f"balance now {updated_item.quantity} {updated_item.unit}")

    return get_inventory_transaction_by_id(db, transaction.id, org_id), updated_item
