from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine

from app.db import engine as db


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_ready_without_database(client: TestClient) -> None:
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "checks": {"database": "not_configured"}}


def test_ready_with_database(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(db, "engine", create_engine("sqlite://"))
    resp = client.get("/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"]["database"] == "ok"


def test_ready_database_down(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    # a directory that does not exist cannot hold a sqlite file
    monkeypatch.setattr(
        db, "engine", create_engine("sqlite:////nonexistent-dir/missing/db.sqlite")
    )
    resp = client.get("/ready")
    assert resp.status_code == 503
    assert resp.json() == {"status": "degraded", "checks": {"database": "error"}}


def test_unknown_route_uses_error_shape(client: TestClient) -> None:
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Not Found"}
