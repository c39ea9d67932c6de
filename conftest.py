import os
import tempfile

# Point the default database away from the working directory before any
# project module reads settings; api.py builds an app at import time.
os.environ.setdefault("BOOKSTORE_DB_FILE", os.path.join(tempfile.gettempdir(), f"bookstore_test_{os.getpid()}.db"))

import pytest
from fastapi.testclient import TestClient

from api import create_app
from config import settings
from library import Library


@pytest.fixture
def db_file(tmp_path, monkeypatch):
    # A unique database file per test
    path = str(tmp_path / "bookstore.db")
    monkeypatch.setattr(settings, "database_file", path)
    return path


@pytest.fixture
def lib(db_file):
    return Library(db_file=db_file)


@pytest.fixture
def client(lib):
    with TestClient(create_app(lib)) as test_client:
        yield test_client
