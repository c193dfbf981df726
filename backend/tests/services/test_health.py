"""Health & Welcome — liveness, readiness and the welcome page need no token."""

import task_manager.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503


async def test_welcome_is_plain_text(client):
    res = await client.get("/welcome")
    assert res.status_code == 200
    assert res.text == "Welcome to Task Manager"
    assert res.headers["content-type"].startswith("text/plain")


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}
