import pytest
from fastapi.testclient import TestClient

import db


@pytest.fixture(params=["file", "sqlite"])
def store(request, tmp_path):
    """Fresh store per test, for each backend."""
    store = db.create_store(request.param, tmp_path)
    db.configure_store(store)
    yield store
    db.configure_store(None)


@pytest.fixture
def file_store(tmp_path):
    store = db.create_store("file", tmp_path)
    db.configure_store(store)
    yield store
    db.configure_store(None)


@pytest.fixture
def app():
    from main import app
    return app


@pytest.fixture
def client(store, app):
    with TestClient(app) as c:
        yield c
