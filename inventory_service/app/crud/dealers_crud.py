# app/crud/dealers_crud.py
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
from ..models.dealers import Dealer
from ..schemas.dealers_schemas import DealerCreate, DealerUpdate

logger = logging.getLogger(__name__)


def get_dealers(db: Session, org_id: UUID) -> List[Dealer]:
    return db.query(Dealer).filter(
        Dealer.org_id == org_id
    ).order_by(Dealer.created_at.desc(), Dealer.id.desc()).all()


def get_dealer_by_id(db: Session, dealer_id: UUID, org_id: UUID) -> Dealer:
    db_dealer = db.query(Dealer).filter(
        Dealer.id == dealer_id,
        Dealer.org_id == org_id
    ).first()
    if not db_dealer:
        raise NotFoundError("Dealer", dealer_id)
    return db_dealer


def create_dealer(db: Session, dealer: DealerCreate, org_id: UUID) -> Dealer:
    now = datetime.now(timezone.utc)
    db_dealer = Dealer(org_id=org_id, created_at=now, updated_at=now, **dealer.column_values())
    try:
        db.add(db_dealer)
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception("Failed to create dealer")
        raise translate_db_error(e) from e
    db.refresh(db_dealer)
    return db_dealer


def update_dealer(db: Session, dealer_id: UUID, dealer: DealerUpdate, org_id: UUID) -> Dealer:
    db_dealer = get_dealer_by_id(db, dealer_id, org_id)

    for key, value in dealer.column_values(exclude_unset=True).items():
        if key in ("name", "status") and value is None:
            raise ValidationError(f"{key} cannot be empty")
        setattr(db_dealer, key, value)
    db_dealer.updated_at = datetime.now(timezone.utc)

    try:
        db.commit()
    except SQLAlchemyError as e:
        rollback_quietly(db)
        logger.exception(f"Failed to update dealer {dealer_id}")
        raise translate_db_error(e) from e
    db.refresh(db_dealer)
    return db_dealer


def active_dealer_lookup(db: Session, org_id: UUID) -> List[Lookup]:
    # Transfers may only target active dealers
    dealers = db.query(Dealer).filter(
        Dealer.org_id == org_id,
        Dealer.status == PartyStatus.active.value
    ).order_by(Dealer.name.asc()).all()
    return [
        Lookup(id=d.id, name=f"{d.name} - {d.location}" if d.location else d.name)
        for d in dealers
    ]
