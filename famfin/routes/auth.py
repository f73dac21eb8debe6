import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import auth, schemas
from ..db import models
from ..db.session import get_db
from ..errors import BadRequest
from ..navigation import menu_for

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=schemas.SignInResponse)
def signup(payload: schemas.SignUpRequest, db: Session = Depends(get_db)):
    """Open a new family with the signing-up user as its ADMIN."""
    email = payload.email.lower()
    if db.query(models.User).filter(models.User.email == email).first():
        raise BadRequest("Email already registered")

    family = models.Family(name=f"{payload.username}'s family")
    user = models.User(
        username=payload.username,
        email=email,
        password=auth.get_password_hash(payload.password),
        role=models.Role.ADMIN,
        family=family,
    )
    db.add_all([family, user])
    db.commit()
    db.refresh(user)
    logger.info("family %s created by %s", family.id, user.id)
    return {"token": auth.token_for(user), "userID": user.id, "userRole": user.role, "username": user.username}


@router.post("/signin", response_model=schemas.SignInResponse)
def signin(payload: schemas.SignInRequest, db: Session = Depends(get_db)):
    user = db.query(models.User).filter(models.User.email == payload.email.lower()).first()
    if not user or not auth.verify_password(payload.password, user.password):
        raise BadRequest("Invalid email or password")
    return {"token": auth.token_for(user), "userID": user.id, "userRole": user.role, "username": user.username}


@router.get("/session", response_model=schemas.SessionResponse)
def session(current_user: models.User = Depends(auth.get_current_user)):
    """Claims for the presented token, read back from the database."""
    return {
        "userID": current_user.id,
        "userRole": current_user.role,
        "username": current_user.username,
        "menu": menu_for(current_user.role),
    }
