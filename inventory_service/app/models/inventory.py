# app/models/inventory.py
import uuid
from sqlalchemy import Column, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base, MilliQuantity


class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    item_type = Column(String(32), nullable=False, default="gold")
    quantity = Column(MilliQuantity, nullable=False, default=0)
    unit = Column(String(16), nullable=False, default="grams")
    description = Column(Text)
    location = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    # the database refuses to delete an item that still has transactions
    transactions = relationship("InventoryTransaction", back_populates="inventory", passive_deletes="all")
