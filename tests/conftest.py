"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Users with bearer tokens (regular, second owner, read-only demo)
- Jobs inserted directly with chosen timestamps
"""

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.database import Base, get_db
from app.core.security import create_access_token, get_password_hash
from app.models.job import Job, JobStatus, JobType
from app.models.user import User
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "secret123"


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    Tables are dropped after the test completes.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """
    FastAPI test client with overridden database dependency.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_user(db_session):
    """Factory creating a persisted user."""
    def _make_user(email: str, name: str = "Tester") -> User:
        user = User(
            id=uuid.uuid4(),
            email=email,
            hashed_password=get_password_hash(TEST_PASSWORD),
            name=name,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def user(make_user):
    return make_user("owner@example.com", name="Owner")


@pytest.fixture
def other_user(make_user):
    return make_user("someone.else@example.com", name="Other")


@pytest.fixture
def demo_user(make_user):
    return make_user(settings.DEMO_USER_EMAIL, name="Demo User")


@pytest.fixture
def headers(user):
    return auth_headers(user)


@pytest.fixture
def other_headers(other_user):
    return auth_headers(other_user)


@pytest.fixture
def demo_headers(demo_user):
    return auth_headers(demo_user)


@pytest.fixture
def make_job(db_session):
    """Factory inserting a job directly, bypassing the API (for timestamps)."""
    def _make_job(
        owner: User,
        company: str = "Acme",
        position: str = "Backend Engineer",
        status: JobStatus = JobStatus.PENDING,
        job_type: JobType = JobType.FULL_TIME,
        created_at: datetime = None,
    ) -> Job:
        job = Job(
            company=company,
            position=position,
            status=status,
            job_type=job_type,
            created_by=owner.id,
        )
        if created_at is not None:
            job.created_at = created_at
        db_session.add(job)
        db_session.commit()
        db_session.refresh(job)
        return job
    return _make_job


@pytest.fixture
def sample_job_data():
    """Sample job payload as sent by the frontend"""
    return {
        "company": "Globex",
        "position": "Senior Python Developer",
        "status": "interview",
        "jobType": "remote",
        "jobLocation": "Berlin",
    }
