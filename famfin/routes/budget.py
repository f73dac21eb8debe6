"""
Family budgets, pocket money planning and the monthly overview.

The family budget caps how much pocket money may be planned for a month;
the cap is checked here for the months a save touches, whether the save
changes the budget or the pocket money.
"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..budget import exceeded_months, month_bounds, monthly_summary
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest
from .deps import family_user_ids, load_admin, load_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/budget", tags=["budget"])


def family_budgets(db: Session, family_id: str):
    return (
        db.query(models.Budget)
        .filter(models.Budget.family_id == family_id)
        .order_by(models.Budget.month)
        .all()
    )


def family_pocket_money(db: Session, family_id: str):
    return (
        db.query(models.PocketMoney)
        .join(models.PocketMoney.owner)
        .filter(models.User.family_id == family_id)
        .order_by(models.PocketMoney.month)
        .all()
    )


@router.get("/get-budget", response_model=schemas.BudgetList)
def get_budget(
    userID: Optional[str] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    budgets = family_budgets(db, user.family_id)
    return {"budget": [schemas.BudgetOut.model_validate(b) for b in budgets]}


@router.post("/edit-budget", response_model=schemas.Message, response_model_exclude_none=True)
def edit_budget(
    payload: schemas.BudgetIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Set the family budget for each month in the payload."""
    auth.check_requester(payload.user_id, session_user, privileged=True)
    admin = load_admin(db, payload.user_id, "Only admin can edit budget")

    existing = {b.month: b for b in family_budgets(db, admin.family_id)}
    for entry in payload.budget:
        row = existing.get(entry.month)
        if row is None:
            row = models.Budget(family_id=admin.family_id, month=entry.month, amount=entry.amount)
            db.add(row)
            existing[entry.month] = row
        else:
            row.amount = entry.amount

    touched = {entry.month for entry in payload.budget}
    planned = family_pocket_money(db, admin.family_id)
    over = [m for m in exceeded_months(existing.values(), planned) if m in touched]
    if over:
        db.rollback()
        months = ", ".join(m.strftime("%B %Y") for m in over)
        raise BadRequest(f"Budget below planned pocket money: {months}")
    db.commit()
    return {"message": "Budget saved successfully"}


@router.get("/get-pocket-money", response_model=schemas.PocketMoneyList)
def get_pocket_money(
    userID: Optional[str] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """ADMINs get the whole family's plan plus the months over budget."""
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    family_entries = family_pocket_money(db, user.family_id)
    exceeded = exceeded_months(family_budgets(db, user.family_id), family_entries)
    if user.role == models.Role.ADMIN:
        entries = family_entries
    else:
        entries = [e for e in family_entries if e.user_id == user.id]
    return {
        "pocketMoney": [schemas.PocketMoneyOut.model_validate(e) for e in entries],
        "exceeded": exceeded,
    }


@router.post("/edit-pocket-money", response_model=schemas.Message, response_model_exclude_none=True)
def edit_pocket_money(
    payload: schemas.PocketMoneyIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Save pocket money entries, one per user and month.

    Entries without an id update the row already planned for that user and
    month, if any. Nothing is written when a month ends up over budget.
    """
    auth.check_requester(payload.user_id, session_user, privileged=True)
    admin = load_admin(db, payload.user_id, "Only admin can edit pocket money")

    members = set(family_user_ids(db, admin.family_id))
    current = family_pocket_money(db, admin.family_id)
    by_id = {e.id: e for e in current}
    by_key = {(e.user_id, e.month): e for e in current}

    try:
        for entry in payload.pocket_money:
            if entry.user_id not in members:
                raise BadRequest("No user found")
            row = by_id.get(entry.id) if entry.id else None
            if row is None:
                row = by_key.get((entry.user_id, entry.month))
            if row is None:
                row = models.PocketMoney(user_id=entry.user_id, month=entry.month, amount=entry.amount)
                db.add(row)
                by_key[(entry.user_id, entry.month)] = row
            else:
                taken = by_key.get((entry.user_id, entry.month))
                if taken is not None and taken is not row:
                    raise BadRequest("Pocket money already planned for that month")
                by_key.pop((row.user_id, row.month), None)
                row.user_id = entry.user_id
                row.month = entry.month
                row.amount = entry.amount
                by_key[(row.user_id, row.month)] = row
    except BadRequest:
        db.rollback()
        raise

    touched = {entry.month for entry in payload.pocket_money}
    budgets = family_budgets(db, admin.family_id)
    over = [m for m in exceeded_months(budgets, by_key.values()) if m in touched]
    if over:
        db.rollback()
        months = ", ".join(m.strftime("%B %Y") for m in over)
        raise BadRequest(f"Budget limit exceeded: {months}")
    db.commit()
    return {"message": "Pocket money saved successfully"}


@router.get("/get-overview", response_model=schemas.Overview)
def get_overview(
    userID: Optional[str] = None,
    month: Optional[date] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Income, spendings and the resulting total of one user for one month."""
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    start, end = month_bounds(month or date.today())

    pocket_money = (
        db.query(models.PocketMoney)
        .filter(models.PocketMoney.user_id == user.id, models.PocketMoney.month == start)
        .first()
    )
    cash_flow = (
        db.query(models.CashFlow)
        .filter(
            models.CashFlow.user_id == user.id,
            models.CashFlow.date >= start,
            models.CashFlow.date < end,
        )
        .all()
    )
    return monthly_summary(start, pocket_money.amount if pocket_money else None, cash_flow)
