"""
Tests for health, index, ping, stats and the error envelope
"""

import inspect
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import OperationalError

from database.connection import get_db


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "timestamp" in data


def test_api_index(client):
    response = client.get("/api")
    assert response.status_code == 200
    assert response.json() == {"name": "WIMS Backend", "version": "0.1.0"}


def test_db_ping(client, db):
    now = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    db.queue({"now": now})
    response = client.get("/api/db/ping")
    assert response.status_code == 200
    assert response.json()["ok"] is True
    assert response.json()["now"].startswith("2025-01-02T03:04:05")
    assert "now()" in db.last_sql


def test_db_ping_failure(client, db):
    db.error = OperationalError("SELECT now()", {}, Exception("connection refused"))
    response = client.get("/api/db/ping")
    assert response.status_code == 500
    assert response.json() == {"error": "DB connection failed", "ok": False}


def test_stats(client, db):
    counts = {
        "species": 4, "sightings": 12, "reserves": 2, "hunters": 5,
        "licences": 3, "poaching": 1, "quotas": 6,
    }
    db.queue(counts)
    response = client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == counts
    assert "annual_quota" in db.last_sql


def test_stats_failure(client, db):
    db.error = OperationalError("SELECT", {}, Exception("boom"))
    response = client.get("/api/stats")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch stats"}


def test_unknown_route(client):
    response = client.get("/api/elephants")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_cors_preflight_allows_dashboard_origin(client):
    response = client.options(
        "/api/species",
        headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


def test_cors_other_origin_not_allowed(client, db):
    response = client.get("/api/species", headers={"Origin": "http://evil.example"})
    assert "access-control-allow-origin" not in response.headers


def test_unhandled_error_is_logged(client, caplog):
    def broken_db():
        raise RuntimeError("could not translate host name")

    client.app.dependency_overrides[get_db] = broken_db
    with caplog.at_level(logging.ERROR, logger="errors"):
        response = client.get("/api/species")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    record = next(r for r in caplog.records if r.name == "errors")
    assert "GET /api/species" in record.getMessage()
    assert record.exc_info[0] is RuntimeError


def test_database_routes_run_in_threadpool(client):
    skipped = ("/api/health", "/api/docs", "/api/redoc")
    database_routes = [
        route for route in client.app.routes
        if getattr(route, "path", "").startswith("/api/") and not route.path.startswith(skipped)
    ]
    assert len(database_routes) > 30
    for route in database_routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
