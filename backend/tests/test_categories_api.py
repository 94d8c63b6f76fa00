# ruff: noqa: INP001
"""HTTP behavior of the category endpoints."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from task_planner.api import categories as categories_api
from task_planner.api import tasks as tasks_api
from task_planner.api.deps import get_store
from task_planner.core.error_handling import install_error_handling
from task_planner.db.backends import KeyValueBackend
from task_planner.db.store import EntityStore

NOW = datetime(2024, 1, 10, 12, 0)


def _client() -> TestClient:
    store = EntityStore(KeyValueBackend(), clock=lambda: NOW)
    store.open()
    app = FastAPI()
    install_error_handling(app)
    api = APIRouter(prefix="/api")
    api.include_router(tasks_api.router)
    api.include_router(categories_api.router)
    app.include_router(api)
    app.dependency_overrides[get_store] = lambda: store
    return TestClient(app)


def test_list_and_get() -> None:
    client = _client()

    listing = client.get("/api/categories").json()

    assert len(listing) == 7
    assert listing[0] == {"id": "1", "name": "Cloud", "color": "#3B82F6"}
    assert client.get("/api/categories/3").json()["name"] == "AI"
    resp = client.get("/api/categories/missing")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Category not found"


def test_create_requires_name_and_defaults_color() -> None:
    client = _client()

    missing = client.post("/api/categories", json={"color": "#000000"})
    created = client.post("/api/categories", json={"name": "Security"})

    assert missing.status_code == 400
    assert missing.json()["detail"] == "Category name is required"
    assert created.status_code == 201
    assert created.json()["color"] == "#6B7280"


def test_update_recolors_and_renames() -> None:
    client = _client()

    resp = client.put("/api/categories/2", json={"name": "Platform", "color": "#111111"})

    assert resp.status_code == 200
    assert resp.json() == {"id": "2", "name": "Platform", "color": "#111111"}
    # The seeded DevOps task keeps the old name.
    assert client.get("/api/tasks/3").json()["category"] == "DevOps"


def test_delete_in_use_category_is_400_with_task_count() -> None:
    client = _client()

    resp = client.delete("/api/categories/1")

    assert resp.status_code == 400
    body = resp.json()
    assert body["code"] == "category_in_use"
    assert body["task_count"] == 1
    assert body["detail"].startswith('Cannot delete category "Cloud"')
    assert client.get("/api/categories/1").status_code == 200


def test_delete_unused_category_is_204() -> None:
    client = _client()

    resp = client.delete("/api/categories/3")

    assert resp.status_code == 204
    assert client.get("/api/categories/3").status_code == 404


def test_reassign_then_delete() -> None:
    client = _client()

    moved = client.post("/api/categories/1/reassign", json={"target": "AI"})
    deleted = client.delete("/api/categories/1")

    assert moved.json() == {"moved": 1}
    assert deleted.status_code == 204
    assert client.get("/api/tasks/1").json()["category"] == "AI"


def test_reassign_to_unknown_category_is_400() -> None:
    client = _client()

    resp = client.post("/api/categories/1/reassign", json={"target": "Nowhere"})

    assert resp.status_code == 400
    assert resp.json()["code"] == "validation_error"
