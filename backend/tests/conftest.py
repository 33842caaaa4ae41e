import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine, SQLModel
from sqlmodel.pool import StaticPool

from historyaddress import models  # noqa: F401
from historyaddress.api.deps import get_today
from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.core.config import settings
from historyaddress.core.db import configure_engine, get_session
from historyaddress.main import app
from historyaddress.services.seed import import_initial_data

SAMPLE_DATA = os.path.join(os.path.dirname(os.path.dirname(__file__)), "historyaddress", "data", "people.json")
TODAY = date(2025, 11, 7)


# create in-memory test database
@pytest.fixture(name="engine")
def engine_fixture():
    engine = configure_engine(create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    ))
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="cache")
def cache_fixture():
    return TTLCache(max_size=100)


@pytest.fixture(name="seeded")
def seeded_fixture(session: Session):
    """the five bundled sample homes"""
    import_initial_data(session, SAMPLE_DATA)
    return session


@pytest.fixture(autouse=True)
def open_admin_gate(monkeypatch):
    # admin-gate tests set their own hash
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", "")


@pytest.fixture(name="client")
def client_fixture(session: Session, cache: TTLCache):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_today] = lambda: TODAY
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
