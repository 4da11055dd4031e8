import pytest
from fastapi.testclient import TestClient
from loguru import logger

from directory_store import DirectoryStore, StoreReadError, StoreWriteError
from mothership import create_app
from registry import RegistryService


class BrokenStore:
    """Store whose every call blows up."""

    def put(self, key, value):
        raise StoreWriteError("disk on fire")

    def get(self, key):
        raise StoreReadError("disk on fire")

    def count(self):
        raise StoreReadError("disk on fire")


@pytest.fixture
def store(tmp_path):
    with DirectoryStore(tmp_path / "mothership_db") as s:
        yield s


@pytest.fixture
def registry(store):
    return RegistryService(store)


@pytest.fixture
def client(registry):
    return TestClient(create_app(registry, "mothership-test"))


@pytest.fixture
def broken_client():
    return TestClient(create_app(RegistryService(BrokenStore()), "mothership-test"))


@pytest.fixture
def log_records():
    records = []
    handler_id = logger.add(lambda m: records.append(m.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
