"""
Shared pytest fixtures.

Every test gets a fresh in-memory SQLite database; the app's `get_db`
dependency is overridden to hand out the same session the test uses, so
tests can seed rows directly and inspect them after a request.
"""
import os

# Must be set before anything under app/ is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.main import app
from app.models.enums import LeadStatus
from app.models.lead import Lead
from app.models.user import User

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============================================================
# Database + client
# ============================================================

@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def safe_client(db):
    """Client that returns 500 responses instead of re-raising server errors."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


# ============================================================
# Users
# ============================================================

def make_user(db, email, role="user", name=None, password="password123"):
    user = User(
        email=email,
        name=name or email.split("@")[0],
        role=role,
        password_hash=get_password_hash(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin(db):
    return make_user(db, "admin@example.com", role="admin", name="Ada Admin")


@pytest.fixture
def rep(db):
    return make_user(db, "rep@example.com", name="Rita Rep")


@pytest.fixture
def other_rep(db):
    return make_user(db, "other@example.com", name="Otto Other")


def auth_headers(user):
    token = create_access_token({"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


# ============================================================
# Leads
# ============================================================

def make_lead(db, owner, **fields):
    defaults = {
        "first_name": "Jane",
        "last_name": "Doe",
        "status": LeadStatus.NEW,
    }
    defaults.update(fields)
    lead = Lead(assigned_to_id=owner.id if owner else None, **defaults)
    db.add(lead)
    db.commit()
    db.refresh(lead)
    return lead
