"""Shared fixtures: a temp-file store, its HTTP app, and a UI wired to it."""

import pytest
from fastapi.testclient import TestClient

from gamehorizon.client import GamesClient
from gamehorizon.main import app as store_app
from gamehorizon.main import get_store
from gamehorizon.store import GameStore
from gamehorizon.ui.app import app as ui_app
from gamehorizon.ui.app import get_controller
from gamehorizon.ui.controller import CollectionController


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    """An empty store backed by a temp file."""
    return GameStore(db_path, seed=[])


@pytest.fixture
def api(store):
    store_app.dependency_overrides[get_store] = lambda: store
    with TestClient(store_app) as client:
        yield client
    store_app.dependency_overrides.clear()


@pytest.fixture
def games_client(api):
    return GamesClient(http=api)


@pytest.fixture
def controller(games_client):
    return CollectionController(games_client)


@pytest.fixture
def ui(controller):
    ui_app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(ui_app, follow_redirects=False) as client:
        yield client
    ui_app.dependency_overrides.clear()


@pytest.fixture
def hades():
    return {
        "title": "Hades",
        "genre": "RPG",
        "platforms": ["PC"],
        "releaseYear": 2020,
        "rating": 4.5,
        "completed": True,
        "multiplayer": False,
    }
