# app/models/inventory_transactions.py
import uuid
from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base, MilliQuantity


class InventoryTransaction(Base):
    """One deposit, withdraw or transfer against an inventory item. Rows are never updated."""
    __tablename__ = "inventory_transactions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    inventory_id = Column(
        UUID(as_uuid=True),
        ForeignKey("inventory.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    transaction_type = Column(String(16), nullable=False)
    quantity = Column(MilliQuantity, nullable=False)
    dealer_id = Column(UUID(as_uuid=True), ForeignKey("dealers.id", ondelete="SET NULL"))
    employee_id = Column(UUID(as_uuid=True), ForeignKey("employees.id", ondelete="SET NULL"))
    description = Column(Text)
    notes = Column(Text)
    transaction_date = Column(Date, server_default=func.current_date())
    created_by = Column(String(64))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    inventory = relationship("InventoryItem", back_populates="transactions")
    dealer = relationship("Dealer")
    employee = relationship("Employee")
