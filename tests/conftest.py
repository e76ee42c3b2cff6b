import pytest
from fastapi.testclient import TestClient

from shortlinks.core.config import Settings
from shortlinks.db.memory import InMemoryUrlStore
from shortlinks.db.session import build_engine
from shortlinks.db.store import SqlUrlStore
from shortlinks.main import create_app


@pytest.fixture()
def settings() -> Settings:
    # _env_file=None keeps a developer's .env out of the test run
    return Settings(_env_file=None, database_url="sqlite://")


@pytest.fixture()
def memory_store() -> InMemoryUrlStore:
    return InMemoryUrlStore()


@pytest.fixture()
def sql_store():
    store = SqlUrlStore(build_engine("sqlite://"))
    store.create_schema()
    yield store
    store.close()


@pytest.fixture()
def app(settings, memory_store):
    return create_app(settings, store=memory_store)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sql_client(settings, sql_store):
    # full stack against the real table
    with TestClient(create_app(settings, store=sql_store)) as c:
        yield c
