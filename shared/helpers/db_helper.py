import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import (
    ConflictError,
    InventoryLedgerError,
    PersistenceFailureError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# postgres serialization_failure / deadlock_detected
CONFLICT_SQLSTATES = {"40001", "40P01"}


def translate_db_error(exc: SQLAlchemyError) -> InventoryLedgerError:
    """Map a SQLAlchemy error to the ledger taxonomy without leaking driver text."""
    if isinstance(exc, DBAPIError):
        sqlstate = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
        if sqlstate in CONFLICT_SQLSTATES:
            return ConflictError()
    return PersistenceFailureError()


def rollback_quietly(db: Session):
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.exception("Rollback failed")


def run_with_retry(operation: Callable[[], T], db: Session, attempts: int = 2) -> T:
    """Run ``operation``, retrying once on Conflict or PersistenceFailure.

    Expected errors (validation, not found, insufficient quantity) are raised
    on the first attempt.
    """
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except InventoryLedgerError as e:
            if not e.retryable or attempt == attempts:
                raise
            logger.warning(
                f"{e.code} on attempt {attempt}/{attempts}, retrying")
            rollback_quietly(db)
