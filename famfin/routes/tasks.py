import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest, Forbidden
from ..task_status import resolve_is_active
from .deps import load_admin, load_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_tasks_for_user(db: Session, user_id: str):
    return db.query(models.Task).filter(models.Task.user_id == user_id).all()


def get_tasks_for_admin(db: Session, family_id: str):
    return (
        db.query(models.Task)
        .join(models.Task.owner)
        .filter(models.User.family_id == family_id)
        .all()
    )


@router.get("/get-all-tasks", response_model=schemas.TaskList)
def list_tasks(
    userID: Optional[str] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """USERs see their own tasks, ADMINs every task in their family."""
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    if user.role == models.Role.ADMIN:
        tasks = get_tasks_for_admin(db, user.family_id)
    else:
        tasks = get_tasks_for_user(db, user.id)
    return {"tasks": [schemas.TaskOut.model_validate(t) for t in tasks]}


@router.post("/edit-task", response_model=schemas.Message, response_model_exclude_none=True)
def upsert_task(
    payload: schemas.TaskIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Create a task, or update every mutable field of an existing one when ``id`` is set."""
    if not payload.user_id:
        raise BadRequest("User id is required")
    auth.check_requester(None, session_user, privileged=True)
    assignee = load_user(db, payload.user_id)

    task = None
    if payload.id:
        task = db.get(models.Task, payload.id)
        if task is None:
            raise BadRequest("No task found")

    if session_user is not None:
        auth.check_acts_for(session_user, assignee)
        if task is not None:
            auth.check_acts_for(session_user, task.owner)
        already_approved = task is not None and task.status == models.TaskStatus.APPROVED
        is_admin = session_user.role == models.Role.ADMIN
        if payload.status == models.TaskStatus.APPROVED and not already_approved and not is_admin:
            raise Forbidden("Only admin can approve task")

    fields = {
        "name": payload.name,
        "description": payload.description,
        "user_id": payload.user_id,
        "amount": payload.amount,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "is_active": resolve_is_active(payload.status, payload.is_active),
        "status": payload.status,
    }

    if task is not None:
        for key, value in fields.items():
            setattr(task, key, value)
        db.commit()
        return {"message": "Task updated successfully", "id": task.id}

    task = models.Task(**fields)
    db.add(task)
    db.commit()
    logger.info("task %s created for user %s", task.id, task.user_id)
    return {"message": "Task added successfully", "id": task.id}


@router.post("/delete-task", response_model=schemas.Message, response_model_exclude_none=True)
def delete_task(
    payload: schemas.DeleteRequest,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    auth.check_requester(payload.user_id, session_user, privileged=True)
    load_admin(db, payload.user_id, "Only admin can delete task")
    if not payload.id:
        raise BadRequest("Task id is required")

    task = db.get(models.Task, payload.id)
    if task is None:
        raise BadRequest("No task found")
    db.delete(task)
    db.commit()
    logger.info("task %s deleted by %s", payload.id, payload.user_id)
    return {"message": "Task deleted successfully"}
