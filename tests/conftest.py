"""
Pytest fixtures for the inventory ledger test suite.

Tests run against a throwaway SQLite file database; the URL is exported
before any service module is imported so the engine binds to it. Tables are
dropped and recreated for every test.
"""
import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="ledger-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'ledger.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ALGORITHM"] = "HS256"

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, LedgerSessionLocal, ledger_engine
from shared.core.schemas import UserToken
from inventory_service.app.main import app
from inventory_service.app.crud import dealers_crud, employees_crud, inventory_crud
from inventory_service.app.schemas.dealers_schemas import DealerCreate
from inventory_service.app.schemas.employees_schemas import EmployeeCreate
from inventory_service.app.schemas.inventory_schemas import InventoryItemCreate


@pytest.fixture(autouse=True)
def _reset_tables():
    Base.metadata.drop_all(bind=ledger_engine)
    Base.metadata.create_all(bind=ledger_engine)
    yield


@pytest.fixture
def db():
    session = LedgerSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user() -> UserToken:
    return UserToken(user_id=str(uuid4()), org_id=uuid4(), name="Shop Owner", account_type="organization")


@pytest.fixture
def other_user() -> UserToken:
    return UserToken(user_id=str(uuid4()), org_id=uuid4(), name="Other Shop", account_type="organization")


def token_for(user: UserToken) -> str:
    return create_access_token({
        "user_id": user.user_id,
        "org_id": str(user.org_id),
        "name": user.name,
        "account_type": user.account_type,
    })


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {token_for(user)}"}


@pytest.fixture
def other_auth_headers(other_user):
    return {"Authorization": f"Bearer {token_for(other_user)}"}


@pytest.fixture
def make_item(db):
    def _make(org_id, quantity="1000", item_type="gold", unit="grams", **fields):
        item = InventoryItemCreate(item_type=item_type, quantity=Decimal(quantity), unit=unit, **fields)
        return inventory_crud.create_inventory_item(db, item, org_id)
    return _make


@pytest.fixture
def make_dealer(db):
    def _make(org_id, name="Ravi Jewels", status="active", **fields):
        return dealers_crud.create_dealer(db, DealerCreate(name=name, status=status, **fields), org_id)
    return _make


@pytest.fixture
def make_employee(db):
    def _make(org_id, name="Anita", status="active", **fields):
        return employees_crud.create_employee(db, EmployeeCreate(name=name, status=status, **fields), org_id)
    return _make
