import os
from typing import Generator
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

# Environment defaults; must be set before products_api is imported.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ["DATABASE_URL"] = os.getenv("TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:")

from products_api.core.db import Base, get_db, get_engine, get_sessionmaker  # noqa: E402
from products_api.main import app  # noqa: E402
from products_api import models  # noqa: E402,F401


@pytest.fixture(autouse=True)
def _reset_tables() -> Generator[None, None, None]:
    engine = get_engine()
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db() -> Generator[Session, None, None]:
    session = get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def broken_db() -> MagicMock:
    """A session whose every statement fails as if the database were down."""
    session = MagicMock(spec=Session)
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))
    session.execute.side_effect = error
    session.get.side_effect = error
    session.commit.side_effect = error
    return session


@pytest.fixture
def broken_client(broken_db: MagicMock) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: broken_db
    with TestClient(app) as c:
        yield c
