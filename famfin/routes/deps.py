"""
Lookups shared by the resource routers.
"""

from typing import Optional

from sqlalchemy.orm import Session

from ..db import models
from ..errors import BadRequest


def load_user(db: Session, user_id: Optional[str], missing: str = "No userID provided") -> models.User:
    if not user_id:
        raise BadRequest(missing)
    user = db.get(models.User, user_id)
    if user is None:
        raise BadRequest("No user found")
    return user


def load_admin(db: Session, user_id: Optional[str], message: str) -> models.User:
    """Load the requesting user and make sure they are an ADMIN."""
    user = db.get(models.User, user_id) if user_id else None
    if user is None or user.role != models.Role.ADMIN:
        raise BadRequest(message)
    return user


def family_user_ids(db: Session, family_id: str):
    return [uid for (uid,) in db.query(models.User.id).filter(models.User.family_id == family_id)]
