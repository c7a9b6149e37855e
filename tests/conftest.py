import os

import pytest
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["STORAGE_BACKEND"] = "memory"
# Rate limits would trip on tests that post many results in a row.
os.environ["RATE_LIMIT_ENABLED"] = "false"

from abjadmatch.database import Base, SessionLocal, engine, create_tables  # noqa: E402
from abjadmatch.main import app  # noqa: E402
from abjadmatch.storage import SqlCompatibilityStore  # noqa: E402


@pytest.fixture()
def client():
    # Each lifespan builds a fresh in-memory store.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sql_store():
    create_tables(engine)
    yield SqlCompatibilityStore(SessionLocal)
    Base.metadata.drop_all(bind=engine)
