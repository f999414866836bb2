"""
Shared fixtures: an isolated in-memory database per test and a TestClient
wired to it.
"""

import os

# Must be set before fleetbook.db.database reads the environment
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SHEET_SYNC_PATH"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from fleetbook.db.database import Base, get_db, settings
from fleetbook.main import app
from fleetbook.services import refresh_tracker


# =============================================================================
# SHARED STATE
# =============================================================================

@pytest.fixture(autouse=True)
def fresh_refresh_tracker(monkeypatch):
    """Each test gets its own dashboard refresh tracker."""
    monkeypatch.setattr(refresh_tracker, "_TRACKER", None)


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def db_session():
    """Fresh in-memory database shared by every connection of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def client(db_session, tmp_path, monkeypatch):
    """API client using the test database, with exports written under tmp_path."""
    monkeypatch.setattr(settings, "export_dir", str(tmp_path / "exports"))
    monkeypatch.setattr(settings, "sheet_sync_path", "")
    monkeypatch.setattr(settings, "resource_backend", "database")

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
