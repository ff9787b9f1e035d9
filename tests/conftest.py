"""Shared test fixtures for the Travel List API."""

import mongomock
import pytest
from fastapi.testclient import TestClient

from travel_list_api.app.core.db import TravelRepository
from travel_list_api.app.main import create_app


@pytest.fixture
def mongo_client():
    """In-memory stand-in for a MongoDB server."""
    return mongomock.MongoClient()


@pytest.fixture
def repository(mongo_client):
    return TravelRepository(mongo_client, mongo_client["travel_list"]["travels"], timeout=5)


@pytest.fixture
def web_dir(tmp_path):
    """A minimal compiled web client."""
    root = tmp_path / "web"
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<html><body>travel list</body></html>", encoding="utf-8")
    (root / "assets" / "app.js").write_text("console.log('travels');", encoding="utf-8")
    return root


@pytest.fixture
def client(repository, web_dir):
    app = create_app(repository=repository, web_dir=str(web_dir))
    with TestClient(app) as test_client:
        yield test_client
