# app/router/employees_router.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_ledger_db as get_db
from shared.core.schemas import Lookup, UserToken
from ..crud import employees_crud as crud
from ..schemas.employees_schemas import EmployeeCreate, EmployeeListResponse, EmployeeResponse, EmployeeUpdate

router = APIRouter(prefix="/employees",
                   tags=["employees"], dependencies=[Depends(validate_current_token)])


@router.get("", response_model=EmployeeListResponse)
def read_employees(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"employees": crud.get_employees(db, current_user.tenant_id)}


@router.get("/active-lookup", response_model=List[Lookup])
def employee_lookup(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.active_employee_lookup(db, current_user.tenant_id)


@router.post("", response_model=EmployeeResponse)
def create_employee(
    employee: EmployeeCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"employee": crud.create_employee(db, employee, current_user.tenant_id)}


@router.put("/{employee_id}", response_model=EmployeeResponse)
def update_employee(
    employee_id: UUID,
    employee: EmployeeUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return {"employee": crud.update_employee(db, employee_id, employee, current_user.tenant_id)}
