"""
Password hashing, session tokens and the dependencies that resolve the
user behind a request.

A token is accepted from the ``token`` cookie the web client sets after
sign-in, or from an ``Authorization: Bearer`` header.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Cookie, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from .config import settings
from .db import models
from .db.session import get_db
from .errors import Forbidden, Unauthorized

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/signin", auto_error=False)


def get_password_hash(password: str) -> str:
    return generate_password_hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return check_password_hash(hashed_password, plain_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def token_for(user: models.User) -> str:
    return create_access_token(data={"sub": user.id, "role": models.Role(user.role).value})


def decode_access_token(token: str) -> str:
    """Return the user id a token was issued for."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise Unauthorized("Could not validate credentials")
    user_id = payload.get("sub")
    if not user_id:
        raise Unauthorized("Could not validate credentials")
    return user_id


def get_session_user(
    bearer: Optional[str] = Depends(oauth2_scheme),
    token: Optional[str] = Cookie(None),
    db: Session = Depends(get_db),
) -> Optional[models.User]:
    """The user behind the presented token, or ``None`` when no token was sent."""
    raw = bearer or token
    if not raw:
        return None
    user_id = decode_access_token(raw)
    user = db.get(models.User, user_id)
    if user is None:
        raise Unauthorized("Could not validate credentials")
    return user


def get_current_user(user: Optional[models.User] = Depends(get_session_user)) -> models.User:
    if user is None:
        raise Unauthorized("Not authenticated")
    return user


def check_requester(requesting_user_id: Optional[str], session_user: Optional[models.User], privileged: bool = False):
    """Make sure the user id a request names is the one its session belongs to.

    Without a token the named id is taken at face value, unless the operation
    is privileged and sessions are required.
    """
    if session_user is None:
        if privileged and settings.require_session:
            raise Unauthorized("Not authenticated")
        return
    if requesting_user_id and requesting_user_id != session_user.id:
        logger.warning("user %s presented a session for %s", requesting_user_id, session_user.id)
        raise Forbidden("Session does not match the requesting user")


def check_acts_for(session_user: Optional[models.User], owner: models.User):
    """A session may touch rows of its own user, or of anyone in the family it administers."""
    if session_user is None or session_user.id == owner.id:
        return
    if session_user.role == models.Role.ADMIN and session_user.family_id == owner.family_id:
        return
    logger.warning("user %s tried to act for %s", session_user.id, owner.id)
    raise Forbidden("Session does not allow acting for this user")
