import os
import tempfile
from collections.abc import Generator

# Settings are read at import time; point them at a throwaway data directory
# before anything from jobcost is imported.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="jobcost-tests-"))
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["SQLITE_WAL"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session  # noqa: E402

from jobcost.core.db import create_db_and_tables, make_engine  # noqa: E402
from jobcost.infrastructure.database.dependencies import get_session  # noqa: E402
from jobcost.main import app  # noqa: E402


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """A fresh in-memory database per test."""
    test_engine = make_engine("sqlite://", poolclass=StaticPool)
    create_db_and_tables(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(db: Session) -> Generator[TestClient, None, None]:
    """API client bound to the test session; startup seeding is skipped."""
    app.dependency_overrides[get_session] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
