"""
Test configuration for the healthcare portal backend.
"""
import os

# Settings are read at import time, so the environment is prepared first
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = ""
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from portal.auth.dependencies import get_token_codec
from portal.auth.models import User, UserRole
from portal.core.security import hash_password
from portal.database import Base, get_db
from portal.main import app
from portal.medical_records.models import MedicalRecord
from portal.patients.models import Patient
from portal.providers.models import Provider

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEFAULT_PASSWORD = "secret"


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    Create a test client with a test database session.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides = {}


@pytest.fixture
def codec():
    """The token codec the application uses."""
    return get_token_codec()


@pytest.fixture
def make_user(db):
    """
    Factory creating a user and the sub-profile matching its role.
    """
    def _make_user(
        email="a@x.com",
        password=DEFAULT_PASSWORD,
        role=UserRole.PATIENT,
        first_name="Test",
        last_name="User",
        is_active=True,
        two_fa_enabled=False,
        with_profile=True,
        **profile_fields
    ):
        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_active=is_active,
            two_fa_enabled=two_fa_enabled,
        )
        if with_profile and role == UserRole.PATIENT:
            user.patient = Patient(**profile_fields)
        elif with_profile and role == UserRole.PROVIDER:
            user.provider = Provider(**profile_fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def login(client):
    """
    Log a user in through the API and return the bearer token.
    """
    def _login(email, password=DEFAULT_PASSWORD, **extra):
        response = client.post("/auth/login", json={"email": email, "password": password, **extra})
        assert response.status_code == 200, response.text
        return response.json()["data"]["token"]
    return _login


@pytest.fixture
def auth_headers(login):
    """
    Log a user in and return the Authorization header for their session.
    """
    def _auth_headers(email, password=DEFAULT_PASSWORD):
        return {"Authorization": f"Bearer {login(email, password)}"}
    return _auth_headers


@pytest.fixture
def make_record(db):
    """
    Factory creating a medical record for a patient, attributed to a provider.
    """
    def _make_record(patient_user, provider_user, **fields):
        record = MedicalRecord(
            patient_id=patient_user.patient.id,
            provider_id=provider_user.provider.id if provider_user is not None else None,
            **fields
        )
        db.add(record)
        db.commit()
        db.refresh(record)
        return record
    return _make_record
