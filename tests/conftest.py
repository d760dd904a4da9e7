import pytest

from booking_app.core import config
from tests.fixtures_data import TEST_SESSION_SECRET, build_session_factory, seed_base


@pytest.fixture(autouse=True)
def session_secret(monkeypatch):
    monkeypatch.setattr(config, "SESSION_SECRET", TEST_SESSION_SECRET)


@pytest.fixture
def db():
    session = build_session_factory()()
    seed_base(session)
    try:
        yield session
    finally:
        session.close()
