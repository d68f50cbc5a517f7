# tests/conftest.py

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Put the backend root on PYTHONPATH so the collabx package imports
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Keep the test run away from the development database
os.environ.setdefault("DB_URL", "sqlite:///./collabx_test.db")

import collabx.models  # noqa: E402,F401 - register tables on Base.metadata
from collabx.core.rate_limit import limiter  # noqa: E402
from collabx.db import Base, SessionLocal, engine  # noqa: E402
from collabx.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def clean_db():
    """
    Recreate the schema before every test so tests cannot see each other's
    rows, and reset the rate limiter so limits do not carry across tests.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    limiter.reset()
    yield


@pytest.fixture()
def client() -> TestClient:
    """HTTP client for the FastAPI application."""
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
