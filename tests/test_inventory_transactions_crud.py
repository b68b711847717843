from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, OperationalError

from shared.core.exceptions import (
    InsufficientQuantityError,
    NotFoundError,
    PersistenceFailureError,
    ValidationError,
)
from shared.core.database import LedgerSessionLocal
from inventory_service.app.crud import inventory_transactions_crud as crud
from inventory_service.app.models.inventory import InventoryItem
from inventory_service.app.models.inventory_transactions import InventoryTransaction
from inventory_service.app.schemas.inventory_schemas import stock_status_for
from inventory_service.app.schemas.inventory_transactions_schemas import InventoryTransactionCreate


def record(db, user, item, transaction_type, quantity, **fields):
    payload = InventoryTransactionCreate(
        inventory_id=item.id,
        transaction_type=transaction_type,
        quantity=Decimal(quantity),
        **fields,
    )
    return crud.record_inventory_transaction(db, payload, user)


def fresh_balance(item_id) -> Decimal:
    session = LedgerSessionLocal()
    try:
        return session.query(InventoryItem).filter(InventoryItem.id == item_id).one().quantity
    finally:
        session.close()


def transaction_count() -> int:
    session = LedgerSessionLocal()
    try:
        return session.query(InventoryTransaction).count()
    finally:
        session.close()


class TestBalanceArithmetic:

    def test_deposit_increases_balance(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="1000")

        transaction, updated = record(db, user, item, "deposit", "250.5")

        assert updated.quantity == Decimal("1250.5")
        assert transaction.transaction_type == "deposit"
        assert transaction.quantity == Decimal("250.5")
        assert fresh_balance(item.id) == Decimal("1250.5")

    def test_withdraw_decreases_balance(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="1000")

        _, updated = record(db, user, item, "withdraw", "300")

        assert updated.quantity == Decimal("700")

    def test_deposit_then_withdraw_restores_balance_exactly(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="1000")

        record(db, user, item, "deposit", "12.345")
        _, updated = record(db, user, item, "withdraw", "12.345")

        assert updated.quantity == Decimal("1000")
        assert fresh_balance(item.id) == Decimal("1000")

    def test_transfer_to_active_dealer(self, db, user, make_item, make_dealer):
        item = make_item(user.tenant_id, quantity="1000")
        dealer = make_dealer(user.tenant_id, company="Ravi & Sons", phone="555-0101")

        transaction, updated = record(db, user, item, "transfer", "200", dealer_id=dealer.id)

        assert updated.quantity == Decimal("800")
        assert transaction.transaction_type == "transfer"
        assert transaction.dealer_id == dealer.id
        assert transaction.dealer.name == "Ravi Jewels"
        assert transaction.inventory.id == item.id

    def test_withdraw_entire_balance_leaves_item_empty(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="500")

        _, updated = record(db, user, item, "withdraw", "500")

        assert updated.quantity == Decimal("0")
        assert stock_status_for(updated.quantity).value == "Empty"


    def test_fractional_deposits_withdraw_to_exactly_empty(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="0.7")

        record(db, user, item, "deposit", "0.1")
        _, updated = record(db, user, item, "withdraw", "0.8")

        assert updated.quantity == Decimal("0")
        assert fresh_balance(item.id) == Decimal("0")

    def test_many_small_deposits_sum_exactly(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="0.001")

        for _ in range(10):
            record(db, user, item, "deposit", "0.1")
        _, updated = record(db, user, item, "withdraw", "1.001")

        assert updated.quantity == Decimal("0")


class TestGuards:

    def test_withdraw_from_empty_item_fails_without_writes(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="500")
        record(db, user, item, "withdraw", "500")

        with pytest.raises(InsufficientQuantityError) as exc_info:
            record(db, user, item, "withdraw", "1")

        assert exc_info.value.available == Decimal("0")
        assert exc_info.value.unit == "grams"
        assert fresh_balance(item.id) == Decimal("0")
        assert transaction_count() == 1

    def test_transfer_beyond_balance_fails(self, db, user, make_item, make_dealer):
        item = make_item(user.tenant_id, quantity="100")
        dealer = make_dealer(user.tenant_id)

        with pytest.raises(InsufficientQuantityError):
            record(db, user, item, "transfer", "100.001", dealer_id=dealer.id)

        assert fresh_balance(item.id) == Decimal("100")
        assert transaction_count() == 0

    @pytest.mark.parametrize("quantity", ["-5", "0"])
    def test_non_positive_quantity_is_rejected(self, db, user, make_item, quantity):
        item = make_item(user.tenant_id, quantity="100")

        with pytest.raises(ValidationError):
            record(db, user, item, "deposit", quantity)

        assert fresh_balance(item.id) == Decimal("100")
        assert transaction_count() == 0

    def test_unknown_transaction_type_is_rejected(self, db, user, make_item):
        item = make_item(user.tenant_id)

        with pytest.raises(ValidationError):
            record(db, user, item, "gift", "1")

        assert transaction_count() == 0

    def test_transfer_requires_dealer(self, db, user, make_item):
        item = make_item(user.tenant_id)

        with pytest.raises(ValidationError):
            record(db, user, item, "transfer", "10")

        assert fresh_balance(item.id) == Decimal("1000")

    def test_inactive_dealer_is_rejected(self, db, user, make_item, make_dealer):
        item = make_item(user.tenant_id)
        dealer = make_dealer(user.tenant_id, status="inactive")

        with pytest.raises(ValidationError):
            record(db, user, item, "transfer", "10", dealer_id=dealer.id)

        assert fresh_balance(item.id) == Decimal("1000")

    def test_inactive_employee_is_rejected(self, db, user, make_item, make_employee):
        item = make_item(user.tenant_id)
        employee = make_employee(user.tenant_id, status="inactive")

        with pytest.raises(ValidationError):
            record(db, user, item, "withdraw", "10", employee_id=employee.id)

    def test_missing_item_raises_not_found(self, db, user):
        payload = InventoryTransactionCreate(
            inventory_id=uuid4(), transaction_type="deposit", quantity=Decimal("1"))

        with pytest.raises(NotFoundError):
            crud.record_inventory_transaction(db, payload, user)

        assert transaction_count() == 0

    def test_other_tenants_item_raises_not_found(self, db, user, other_user, make_item):
        item = make_item(other_user.tenant_id, quantity="100")

        with pytest.raises(NotFoundError):
            record(db, user, item, "withdraw", "10")

        assert fresh_balance(item.id) == Decimal("100")

    def test_other_tenants_dealer_raises_not_found(self, db, user, other_user, make_item, make_dealer):
        item = make_item(user.tenant_id)
        dealer = make_dealer(other_user.tenant_id)

        with pytest.raises(NotFoundError):
            record(db, user, item, "transfer", "10", dealer_id=dealer.id)


class TestAtomicity:

    def test_failed_commit_leaves_balance_and_log_unchanged(self, db, user, make_item, monkeypatch):
        item = make_item(user.tenant_id, quantity="1000")

        def failing_commit():
            raise OperationalError("COMMIT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "commit", failing_commit)

        with pytest.raises(PersistenceFailureError) as exc_info:
            record(db, user, item, "withdraw", "300")

        assert "connection lost" not in exc_info.value.message
        assert fresh_balance(item.id) == Decimal("1000")
        assert transaction_count() == 0


class TestLedgerRetention:

    def test_deleting_item_with_transactions_is_refused(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="100")
        record(db, user, item, "deposit", "1")

        with pytest.raises(IntegrityError):
            db.execute(delete(InventoryItem).where(InventoryItem.id == item.id))
        db.rollback()

        assert fresh_balance(item.id) == Decimal("101")
        assert transaction_count() == 1

    def test_orm_delete_of_item_with_transactions_is_refused(self, db, user, make_item):
        item = make_item(user.tenant_id, quantity="100")
        record(db, user, item, "withdraw", "40")

        db.delete(item)
        with pytest.raises(IntegrityError):
            db.commit()
        db.rollback()

        assert fresh_balance(item.id) == Decimal("60")
        assert transaction_count() == 1


class TestListTransactions:

    def test_newest_first_with_joined_references(self, db, user, make_item, make_dealer, make_employee):
        item = make_item(user.tenant_id, quantity="1000")
        dealer = make_dealer(user.tenant_id)
        employee = make_employee(user.tenant_id, position="Manager")

        first, _ = record(db, user, item, "deposit", "10", employee_id=employee.id)
        second, _ = record(db, user, item, "transfer", "20", dealer_id=dealer.id, description="Consignment")

        transactions = crud.get_inventory_transactions(db, user.tenant_id)

        assert [t.id for t in transactions] == [second.id, first.id]
        assert transactions[0].dealer.id == dealer.id
        assert transactions[0].description == "Consignment"
        assert transactions[1].employee.position == "Manager"
        assert transactions[1].inventory.unit == "grams"
        assert transactions[1].created_by == user.user_id

    def test_filter_by_item_and_tenant(self, db, user, other_user, make_item):
        gold = make_item(user.tenant_id)
        silver = make_item(user.tenant_id, item_type="silver")
        foreign = make_item(other_user.tenant_id)
        record(db, user, gold, "deposit", "1")
        record(db, user, silver, "deposit", "1")
        record(db, other_user, foreign, "deposit", "1")

        assert len(crud.get_inventory_transactions(db, user.tenant_id)) == 2
        only_silver = crud.get_inventory_transactions(db, user.tenant_id, silver.id)
        assert [t.inventory_id for t in only_silver] == [silver.id]
