"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client with database and storage overrides
- Users, companies and jobs plus their auth headers
"""

import os

# Settings are read at import time; never point the app at a real database
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.core.security import create_user_token, get_password_hash
from app.core.storage import LocalStorage, get_storage
from app.models.company import Company, CompanySize
from app.models.job import ExperienceLevel, Job, JobCategory, JobStatus, JobType
from app.models.user import User, UserRole
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
    Create a fresh database session for each test.
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
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "uploads"))


@pytest.fixture
def client(db_session, storage):
    """
    FastAPI test client with overridden database and storage dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_user(db_session, email, role=UserRole.JOBSEEKER, name="Test User", resume="", **fields):
    """Helper to create a user directly in the database"""
    user = User(
        email=email,
        name=name,
        hashed_password=get_password_hash(TEST_PASSWORD),
        role=role,
        resume=resume,
        **fields,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def make_company(db_session, owner, name="Acme Corp", **fields):
    company = Company(
        name=name,
        description=fields.pop("description", "We build things"),
        industry=fields.pop("industry", "Technology"),
        company_size=fields.pop("company_size", CompanySize.S),
        location=fields.pop("location", {"city": "Berlin", "country": "Germany"}),
        owner_id=owner.id,
        **fields,
    )
    db_session.add(company)
    db_session.flush()
    owner.company_id = company.id
    db_session.commit()
    db_session.refresh(company)
    return company


def make_job(db_session, company, poster, title="Python Developer", **fields):
    job = Job(
        title=title,
        description=fields.pop("description", "Build APIs with FastAPI"),
        company_id=company.id,
        posted_by_id=poster.id,
        job_type=fields.pop("job_type", JobType.FULL_TIME),
        experience_level=fields.pop("experience_level", ExperienceLevel.MID),
        category=fields.pop("category", JobCategory.SOFTWARE_DEVELOPMENT),
        location=fields.pop("location", {"city": "Berlin", "country": "Germany", "remote": False}),
        salary=fields.pop("salary", {"min": 50000, "max": 70000, "currency": "EUR", "period": "yearly"}),
        status=fields.pop("status", JobStatus.ACTIVE),
        **fields,
    )
    db_session.add(job)
    db_session.commit()
    db_session.refresh(job)
    return job


def auth_headers(user):
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def employer(db_session):
    return make_user(db_session, "employer@example.com", UserRole.EMPLOYER, name="Erin Employer")


@pytest.fixture
def other_employer(db_session):
    return make_user(db_session, "other@example.com", UserRole.EMPLOYER, name="Oscar Other")


@pytest.fixture
def jobseeker(db_session):
    return make_user(
        db_session,
        "seeker@example.com",
        UserRole.JOBSEEKER,
        name="Sam Seeker",
        resume="/uploads/resumes/sam.pdf",
        skills=["python", "sql"],
    )


@pytest.fixture
def company(db_session, employer):
    return make_company(db_session, employer)


@pytest.fixture
def job(db_session, company, employer):
    return make_job(db_session, company, employer)


@pytest.fixture
def employer_headers(employer):
    return auth_headers(employer)


@pytest.fixture
def jobseeker_headers(jobseeker):
    return auth_headers(jobseeker)


@pytest.fixture
def other_employer_headers(other_employer):
    return auth_headers(other_employer)
