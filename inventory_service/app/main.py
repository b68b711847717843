import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import ledger_engine, Base
from shared.helpers.exception_handler import setup_exception_handlers

from .models import inventory, inventory_transactions, dealers, employees
from .router import (
    dealers_router,
    employees_router,
    inventory_router,
    inventory_transactions_router,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# Create all tables
Base.metadata.create_all(bind=ledger_engine)

app = FastAPI(title="Jewelry CRM Inventory Ledger API")

# Allow requests from the React app
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Routers; transactions first so its paths win over /inventory/{item_id}
app.include_router(inventory_transactions_router.router)
app.include_router(inventory_router.router)
app.include_router(dealers_router.router)
app.include_router(employees_router.router)


@app.get("/health")
def health():
    return {"status": "healthy"}
