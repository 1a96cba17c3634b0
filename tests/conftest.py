from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from main import create_app


@pytest.fixture
def db():
    return mongomock.MongoClient()["hotels_test"]


@pytest.fixture
def client(db):
    with TestClient(create_app(database=db)) as c:
        yield c


@pytest.fixture
def broken_db():
    """A handle whose every collection operation fails as if the server were down."""
    down = ServerSelectionTimeoutError("No servers available")
    handle = MagicMock()
    collection = handle.__getitem__.return_value
    for op in ("find", "find_one", "insert_one", "find_one_and_update", "delete_one"):
        getattr(collection, op).side_effect = down
    handle.list_collection_names.side_effect = down
    return handle


@pytest.fixture
def broken_client(broken_db):
    with TestClient(create_app(database=broken_db)) as c:
        yield c
