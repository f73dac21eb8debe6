import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..budget import month_bounds
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest
from .deps import load_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cash-flow", tags=["cash-flow"])


@router.get("/get-cash-flow", response_model=schemas.CashFlowList)
def list_cash_flow(
    userID: Optional[str] = None,
    month: Optional[date] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    query = db.query(models.CashFlow).filter(models.CashFlow.user_id == user.id)
    if month is not None:
        start, end = month_bounds(month)
        query = query.filter(models.CashFlow.date >= start, models.CashFlow.date < end)
    entries = query.order_by(models.CashFlow.date).all()
    return {"cashFlow": [schemas.CashFlowOut.model_validate(e) for e in entries]}


@router.post("/edit-cash-flow", response_model=schemas.Message, response_model_exclude_none=True)
def upsert_cash_flow(
    payload: schemas.CashFlowIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Record an income (positive amount) or expense (negative amount)."""
    if not payload.user_id:
        raise BadRequest("User id is required")
    auth.check_requester(payload.user_id, session_user, privileged=True)
    load_user(db, payload.user_id)

    if payload.id:
        entry = db.get(models.CashFlow, payload.id)
        if entry is None or entry.user_id != payload.user_id:
            raise BadRequest("No cash flow found")
        entry.name = payload.name
        entry.amount = payload.amount
        entry.date = payload.day
        db.commit()
        return {"message": "Cash flow updated successfully", "id": entry.id}

    entry = models.CashFlow(
        name=payload.name,
        amount=payload.amount,
        date=payload.day,
        user_id=payload.user_id,
    )
    db.add(entry)
    db.commit()
    return {"message": "Cash flow added successfully", "id": entry.id}


@router.post("/delete-cash-flow", response_model=schemas.Message, response_model_exclude_none=True)
def delete_cash_flow(
    payload: schemas.DeleteRequest,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    auth.check_requester(payload.user_id, session_user, privileged=True)
    if not payload.id:
        raise BadRequest("Cash flow id is required")
    entry = db.get(models.CashFlow, payload.id)
    if entry is None or entry.user_id != payload.user_id:
        raise BadRequest("No cash flow found")
    db.delete(entry)
    db.commit()
    logger.info("cash flow %s deleted by %s", payload.id, payload.user_id)
    return {"message": "Cash flow deleted successfully"}
