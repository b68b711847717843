from decimal import Decimal

from sqlalchemy import BigInteger, create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.types import TypeDecorator
from shared.core.config import LEDGER_DATABASE_URL, settings

Base = declarative_base()


class MilliQuantity(TypeDecorator):
    """
    Decimal quantity with three places, stored as an integer count of thousandths.

    Balance arithmetic and the non-negative guard run on integers in SQL, so
    they are exact on every backend (SQLite has no decimal type).
    """

    impl = BigInteger
    cache_ok = True

    SCALE = Decimal("1000")
    STEP = Decimal("0.001")

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int((Decimal(str(value)) * self.SCALE).to_integral_value())

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) / self.SCALE).quantize(self.STEP)


def engine_options(database_url: str) -> dict:
    """Pool and timeout arguments for the given backend.

    Every datastore call is bounded: postgres gets a statement_timeout,
    sqlite a busy timeout, and both a pool checkout timeout where the pool
    supports one.
    """
    if database_url.startswith("sqlite"):
        return {
            "connect_args": {
                "check_same_thread": False,
                "timeout": settings.DB_STATEMENT_TIMEOUT_MS / 1000,
            },
        }

    return {
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_size": settings.DB_POOL_SIZE,          # max idle connections
        "max_overflow": settings.DB_MAX_OVERFLOW,    # max temporary extra connections
        "pool_timeout": settings.DB_POOL_TIMEOUT,    # wait time before failing
        "connect_args": {
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}",
        },
    }


ledger_engine = create_engine(LEDGER_DATABASE_URL, **engine_options(LEDGER_DATABASE_URL))
LedgerSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=ledger_engine)


if ledger_engine.dialect.name == "sqlite":
    # sqlite ignores foreign keys unless asked per connection
    @event.listens_for(ledger_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Dependency


def get_ledger_db():
    db = LedgerSessionLocal()
    try:
        yield db
    finally:
        db.close()
