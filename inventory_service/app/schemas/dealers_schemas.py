from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.inventory_enum import PartyStatus

# ---------------- Base Dealer ----------------


class DealerBase(EmptyStringModel):
    name: str
    phone: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    status: PartyStatus = PartyStatus.active
    email: Optional[str] = None
    specialization: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


# ---------------- Dealer Create/Update ----------------
class DealerCreate(DealerBase):
    pass


class DealerUpdate(EmptyStringModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    status: Optional[PartyStatus] = None
    email: Optional[str] = None
    specialization: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None


# ---------------- Dealer Output ----------------
class DealerOut(BaseModel):
    id: UUID
    org_id: UUID
    name: str
    phone: Optional[str] = None
    location: Optional[str] = None
    company: Optional[str] = None
    status: str
    email: Optional[str] = None
    specialization: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class DealerResponse(BaseModel):
    dealer: DealerOut


class DealerListResponse(BaseModel):
    dealers: List[DealerOut]
