import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest
from .deps import load_admin, load_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _family_member(db: Session, admin: models.User, user_id: str) -> models.User:
    user = db.get(models.User, user_id)
    if user is None or user.family_id != admin.family_id:
        raise BadRequest("No user found")
    return user


@router.get("/get-all-users", response_model=schemas.UserList)
def list_users(
    userID: Optional[str] = None,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    user = load_user(db, userID)
    auth.check_requester(user.id, session_user)
    if user.role == models.Role.ADMIN:
        users = (
            db.query(models.User)
            .filter(models.User.family_id == user.family_id)
            .order_by(models.User.username)
            .all()
        )
    else:
        users = [user]
    return {"users": [schemas.UserOut.model_validate(u) for u in users]}


@router.post("/edit-user", response_model=schemas.Message, response_model_exclude_none=True)
def upsert_user(
    payload: schemas.UserIn,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Admins add members to their family or edit existing ones."""
    auth.check_requester(payload.requesting_user_id, session_user, privileged=True)
    admin = load_admin(db, payload.requesting_user_id, "Only admin can edit users")

    email = payload.email.lower()
    clash = db.query(models.User).filter(models.User.email == email).first()
    if clash is not None and clash.id != payload.id:
        raise BadRequest("Email already registered")

    if payload.id:
        user = _family_member(db, admin, payload.id)
        user.username = payload.username
        user.email = email
        user.role = payload.role
        if payload.password:
            user.password = auth.get_password_hash(payload.password)
        db.commit()
        return {"message": "User updated successfully", "id": user.id}

    if not payload.password:
        raise BadRequest("Password is required")
    user = models.User(
        username=payload.username,
        email=email,
        password=auth.get_password_hash(payload.password),
        role=payload.role,
        family_id=admin.family_id,
    )
    db.add(user)
    db.commit()
    logger.info("user %s added to family %s", user.id, admin.family_id)
    return {"message": "User added successfully", "id": user.id}


@router.post("/delete-user", response_model=schemas.Message, response_model_exclude_none=True)
def delete_user(
    payload: schemas.DeleteRequest,
    db: Session = Depends(get_db),
    session_user: Optional[models.User] = Depends(auth.get_session_user),
):
    """Remove a family member together with everything they own."""
    auth.check_requester(payload.user_id, session_user, privileged=True)
    admin = load_admin(db, payload.user_id, "Only admin can delete users")
    if not payload.id:
        raise BadRequest("User id is required")
    if payload.id == admin.id:
        raise BadRequest("Admin cannot delete themselves")

    user = _family_member(db, admin, payload.id)
    db.delete(user)
    db.commit()
    logger.info("user %s deleted by %s", payload.id, admin.id)
    return {"message": "User deleted successfully"}
