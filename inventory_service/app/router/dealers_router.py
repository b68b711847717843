# app/router/dealers_router.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_ledger_db as get_db
from shared.core.schemas import Lookup, UserToken
from ..crud import dealers_crud as crud
from ..schemas.dealers_schemas import DealerCreate, DealerListResponse, DealerResponse, DealerUpdate

router = APIRouter(prefix="/dealers",
                   tags=["dealers"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=DealerListResponse)
def read_dealers(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"dealers": crud.get_dealers(db, current_user.tenant_id)}


@router.get("/active-lookup", response_model=List[Lookup])
def dealer_lookup(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.active_dealer_lookup(db, current_user.tenant_id)


@router.post("", response_model=DealerResponse)
def create_dealer(
    dealer: DealerCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"dealer": crud.create_dealer(db, dealer, current_user.tenant_id)}


@router.put("/{dealer_id}", response_model=DealerResponse)
def update_dealer(
    dealer_id: UUID,
    dealer: DealerUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"dealer": crud.update_dealer(db, dealer_id, dealer, current_user.tenant_id)}
