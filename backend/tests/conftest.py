# tests/conftest.py
import os
import shutil
import tempfile
from datetime import datetime, timedelta

# Keep the application's own start-up database and logs out of the working tree
TEST_STORAGE_DIR = tempfile.mkdtemp(prefix="docvault-tests-")
os.environ["STORAGE_PATH"] = TEST_STORAGE_DIR
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_STORAGE_DIR}/startup.db"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from docvault.main import app
from docvault.config import settings
from docvault.database import Base, get_db, seed_system_roles
from docvault.models import Document, DocumentAccess, Role, User
from docvault.services.credentials import create_access_token, hash_password

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
DEFAULT_PASSWORD = "password123"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )

    # pysqlite defers BEGIN itself, which breaks the outer-transaction/savepoint
    # isolation used by db_session; let SQLAlchemy emit BEGIN instead
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine

@pytest.fixture(scope="session")
def tables(engine):
    """Create all tables in the test database"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Session inside an outer transaction that is rolled back after the test.

    Service commits and rollbacks only touch savepoints.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection, join_transaction_mode="create_savepoint")()
    seed_system_roles(session)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def make_user(db_session):
    """Factory inserting a user and returning it with a valid token"""
    counter = {"n": 0}

    def _make_user(role_id=None, username=None, active=True):
        counter["n"] += 1
        username = username or f"user{counter['n']}"
        user = User(
            username=username,
            firstname="Test",
            lastname="User",
            email=f"{username}@example.com",
            password_hash=hash_password(DEFAULT_PASSWORD),
            role_id=role_id or settings.DEFAULT_ROLE_ID,
            active=active
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user, create_access_token(user)

    return _make_user

@pytest.fixture
def admin(make_user):
    return make_user(role_id=settings.ADMIN_ROLE_ID, username="admin")

@pytest.fixture
def regular(make_user):
    return make_user(username="regular")

@pytest.fixture
def regular2(make_user):
    return make_user(username="regular2")

@pytest.fixture
def guest_role(db_session):
    role = Role(title="guest")
    db_session.add(role)
    db_session.commit()
    db_session.refresh(role)
    return role

@pytest.fixture
def guest(make_user, guest_role):
    return make_user(role_id=guest_role.id, username="guest")

@pytest.fixture
def make_document(db_session):
    """Factory inserting a document directly, bypassing the API"""
    def _make_document(owner, access=DocumentAccess.PUBLIC, title="Test Document",
                       content="Test content for the document", created_at=None):
        document = Document(
            title=title,
            content=content,
            access=access,
            owner_id=owner.id
        )
        if created_at is not None:
            document.created_at = created_at
        db_session.add(document)
        db_session.commit()
        db_session.refresh(document)
        return document

    return _make_document

@pytest.fixture
def sample_documents(make_document, regular, regular2):
    """Seven documents across owners and access levels, one day apart"""
    owner, _ = regular
    other, _ = regular2
    start = datetime(2024, 1, 1, 12, 0, 0)
    specs = [
        (owner, DocumentAccess.PUBLIC, "Andela bootcamp", "Learning python at the bootcamp"),
        (owner, DocumentAccess.PRIVATE, "Private notes", "Salary negotiation notes"),
        (owner, DocumentAccess.ROLE, "Team handbook", "Onboarding steps for the team"),
        (other, DocumentAccess.PUBLIC, "Cooking", "Jollof rice recipe"),
        (other, DocumentAccess.PRIVATE, "Diary", "Dear diary, python again"),
        (other, DocumentAccess.ROLE, "Team roster", "Who is on call"),
        (owner, DocumentAccess.PUBLIC, "Release notes", "Version two ships python support"),
    ]
    return [
        make_document(o, access, title, content, created_at=start + timedelta(days=i))
        for i, (o, access, title, content) in enumerate(specs)
    ]

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    shutil.rmtree(TEST_STORAGE_DIR, ignore_errors=True)
