# app/crud/employees_crud.py
import logging
from datetime import datetime, timezone
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.exceptions import NotFoundError, ValidationError
from shared.core.schemas import Lookup
from shared.helpers.db_helper import rollback_quietly, translate_db_error
from ..enum.inventory_enum import PartyStatus
from ..models.employees import Employee
from ..schemas.employees_schemas import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


def get_employees(db: Session, org_id: UUID) -> List[Employee]:
    return db.query(Employee).filter(
        Employee.org_id == org_id
    ).order_by(Employee.created_at.desc(), Employee.id.desc()).all()


def get_employee_by_id(db: Session, employee_id: UUID, org_id: UUID) -> Employee:
    db_employee = db.query(Employee).filter(
        Employee.id == employee_id,
        Employee.org_id == org_id
    ).first()
    if not db_employee:
        raise NotFoundError("Employee", employee_id)
    return db_employee


def create_employee(db: Session, employee: EmployeeCreate, org_id: UUID) -> Employee:
    now = datetime.now(timezone.utc)
    db_employee = Employee(org_id=org_id, created_at=now, updated_at=now, **employee.column_values())
    try:
        db.add(db_employee)
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception("Failed to create employee")
        raise translate_db_error(e) from e
    db.refresh(db_employee)
    return db_employee


def update_employee(db: Session, employee_id: UUID, employee: EmployeeUpdate, org_id: UUID) -> Employee:
    db_employee = get_employee_by_id(db, employee_id, org_id)

    for key, value in employee.column_values(exclude_unset=True).items():
        if key in ("name", "status") and value is None:
            raise ValidationError(f"{key} cannot be empty")
        setattr(db_employee, key, value)
    db_employee.updated_at = datetime.now(timezone.utc)

    try:
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception(f"Failed to update employee {employee_id}")
        raise translate_db_error(e) from e
    db.refresh(db_employee)
    return db_employee


def active_employee_lookup(db: Session, org_id: UUID) -> List[Lookup]:
    employees = db.query(Employee).filter(
        Employee.org_id == org_id,
        Employee.status == PartyStatus.active.value
    ).order_by(Employee.name.asc()).all()
    return [
        Lookup(id=e.id, name=f"{e.name} - {e.position or 'Employee'}")
        for e in employees
    ]
