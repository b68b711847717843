# app/models/employees.py
import uuid
from sqlalchemy import Column, Date, DateTime, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    email = Column(String(200))
    phone = Column(String(32))
    position = Column(String(128))
    department = Column(String(128))
    hire_date = Column(Date)
    status = Column(String(16), default="active")
    address = Column(Text)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True),
                        server_default=func.now(), onupdate=func.now())
