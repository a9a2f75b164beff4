"""Health Routes — liveness and readiness probes."""

from bookstore.main import app


async def test_liveness(client):
    resp = await client.get("/api/v1/health/")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "bookstore-api"}


async def test_readiness_with_all_components(client):
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 200
    assert resp.json()["checks"] == {"database": "healthy", "auth": "healthy"}


async def test_readiness_without_token_validator(client, monkeypatch):
    monkeypatch.delattr(app.state, "token_validator")
    resp = await client.get("/api/v1/health/ready")
    assert resp.status_code == 503
    assert resp.json()["checks"]["auth"] == "unconfigured"
