import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from famfin import auth
from famfin.config import settings
from famfin.db import models
from famfin.db.session import get_db
from famfin.main import app


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    models.Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(db, monkeypatch):
    def override_get_db():
        yield db

    monkeypatch.setattr(settings, "require_session", False)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_user(db, family, username, role=models.Role.USER, password="secret123"):
    user = models.User(
        username=username,
        email=f"{username}@example.com",
        password=auth.get_password_hash(password),
        role=role,
        family=family,
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def family(db):
    family = models.Family(name="Smiths")
    db.add(family)
    db.commit()
    return family


@pytest.fixture
def admin(db, family):
    return make_user(db, family, "mum", role=models.Role.ADMIN)


@pytest.fixture
def alice(db, family):
    return make_user(db, family, "alice")


@pytest.fixture
def bob(db, family):
    return make_user(db, family, "bob")


@pytest.fixture
def outsider(db):
    other = models.Family(name="Joneses")
    db.add(other)
    db.commit()
    return make_user(db, other, "outsider")


def bearer(user):
    return {"Authorization": f"Bearer {auth.token_for(user)}"}
