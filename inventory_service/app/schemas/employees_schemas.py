from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.inventory_enum import PartyStatus


class EmployeeBase(EmptyStringModel):
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    status: PartyStatus = PartyStatus.active
    address: Optional[str] = None
    notes: Optional[str] = None


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(EmptyStringModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    status: Optional[PartyStatus] = None
    address: Optional[str] = None
    notes: Optional[str] = None


class EmployeeOut(BaseModel):
    id: UUID
    org_id: UUID
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    status: str
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class EmployeeResponse(BaseModel):
    employee: EmployeeOut


class EmployeeListResponse(BaseModel):
    employees: List[EmployeeOut]
