import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest
from .deps import load_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("/get-all-goals", response_model=schemas.GoalList)
def list_goals(
    userID: Optional[str] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    goals = (
        db.query(models.Goal)
        .filter(models.Goal.user_id == user.id)
        .order_by(models.Goal.end_date)
        .all()
    )
    return {"goals": [schemas.GoalOut.model_validate(g) for g in goals]}


@router.post("/edit-goal", response_model=schemas.Message, response_model_exclude_none=True)
def upsert_goal(
    payload: schemas.GoalIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    if not payload.user_id:
        raise BadRequest("User id is required")
    auth.check_requester(payload.user_id, session_user, privileged=True)
    load_user(db, payload.user_id)

    fields = {
        "name": payload.name,
        "description": payload.description,
        "amount": payload.amount,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "is_active": payload.is_active,
        "user_id": payload.user_id,
    }

    if payload.id:
        goal = db.get(models.Goal, payload.id)
        if goal is None or goal.user_id != payload.user_id:
            raise BadRequest("No goal found")
        for key, value in fields.items():
            setattr(goal, key, value)
        db.commit()
        return {"message": "Goal updated successfully", "id": goal.id}

    goal = models.Goal(**fields)
    db.add(goal)
    db.commit()
    return {"message": "Goal added successfully", "id": goal.id}


@router.post("/delete-goal", response_model=schemas.Message, response_model_exclude_none=True)
def delete_goal(
    payload: schemas.DeleteRequest,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    auth.check_requester(payload.user_id, session_user, privileged=True)
    if not payload.id:
        raise BadRequest("Goal id is required")
    goal = db.get(models.Goal, payload.id)
    if goal is None or goal.user_id != payload.user_id:
        raise BadRequest("No goal found")
    db.delete(goal)
    db.commit()
    logger.info("goal %s deleted by %s", payload.id, payload.user_id)
    return {"message": "Goal deleted successfully"}
