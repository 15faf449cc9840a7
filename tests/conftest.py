"""Pytest configuration and fixtures."""
import os

# Configure the app for an isolated database before anything imports settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DEBUG"] = "true"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.database.database import Base, get_db
from app.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def donor_payload():
    """Build a valid camelCase donor body; keyword overrides replace fields."""
    def build(**overrides):
        payload = {
            "fullName": "Amina Haddad",
            "phone": "+213555010203",
            "birthDate": "1990-03-21",
            "gender": "Female",
            "address": "12 Rue Didouche Mourad, Algiers",
            "numberOfDonations": 3,
        }
        payload.update(overrides)
        return payload
    return build


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions on a file-backed SQLite database that tolerates concurrent writers."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'donors.db'}",
        connect_args={"check_same_thread": False, "timeout": 15},
    )
    Base.metadata.create_all(bind=engine)
    engine.dispose()

    # Writers take the lock at BEGIN so the loser waits instead of deadlocking
    @event.listens_for(engine, "connect")
    def disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    yield sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    engine.dispose()
