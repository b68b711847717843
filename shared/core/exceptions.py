"""
Typed errors raised by the inventory ledger.

Every error carries a machine-readable ``code`` and the HTTP status it maps to,
so the request boundary can translate it without parsing messages:

    InventoryLedgerError
    +-- ValidationError            bad input, nothing changed
    +-- NotFoundError              missing or foreign-tenant reference
    +-- InsufficientQuantityError  withdraw/transfer would go below zero
    +-- ConflictError              concurrent update lost the race
    +-- PersistenceFailureError    datastore unreachable or write rejected
    +-- UnauthorizedError          missing or invalid bearer token
"""
from decimal import Decimal
from typing import Optional


class InventoryLedgerError(Exception):
    code: str = "LEDGER_ERROR"
    http_status: int = 500
    # Expected errors are part of normal operation and are not logged as failures
    expected: bool = False
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(InventoryLedgerError):
    code = "VALIDATION_ERROR"
    http_status = 400
    expected = True


class NotFoundError(InventoryLedgerError):
    code = "NOT_FOUND"
    http_status = 404
    expected = True

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


def format_quantity(value) -> str:
    """Render a quantity without trailing zeros or exponent: 0.800 -> 0.8, 100 -> 100."""
    if value is None:
        return "0"
    return format(Decimal(str(value)).normalize(), "f")


class InsufficientQuantityError(InventoryLedgerError):
    code = "INSUFFICIENT_QUANTITY"
    http_status = 400
    expected = True

    def __init__(self, requested: Decimal, available: Decimal, unit: Optional[str] = None):
        self.requested = requested
        self.available = available
        self.unit = unit or ""
        suffix = f" {self.unit}" if self.unit else ""
        super().__init__(
            f"Insufficient inventory quantity: requested {format_quantity(requested)}{suffix}, "
            f"only {format_quantity(available)}{suffix} available"
        )


class ConflictError(InventoryLedgerError):
    code = "CONFLICT"
    http_status = 409
    retryable = True

    def __init__(self, message: str = "Inventory was modified by another request, please retry"):
        super().__init__(message)


class PersistenceFailureError(InventoryLedgerError):
    code = "PERSISTENCE_FAILURE"
    http_status = 503
    retryable = True

    def __init__(self, message: str = "Inventory store is unavailable, please retry"):
        super().__init__(message)


class UnauthorizedError(InventoryLedgerError):
    code = "UNAUTHORIZED"
    http_status = 401
    expected = True

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
