"""Tests for the liveness and readiness probes."""


async def test_liveness(client):
    response = await client.get("/api/v1/health/")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_readiness_reports_cache_counters(client, author, auth_headers):
    await client.post(
        "/api/v1/posts",
        json={"title": "T", "slug": "t", "content": "body"},
        headers=auth_headers(author),
    )
    await client.get("/blog/t")
    await client.get("/blog/t")

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    body = response.json()
    assert body["checks"]["database"] == "healthy"
    assert body["caches"]["pages"]["hits"] == 1
    assert body["caches"]["data"]["misses"] >= 1


async def test_readiness_fails_when_database_is_down(client, container, monkeypatch):
    async def _down():
        return False

    monkeypatch.setattr(container.db, "health_check", _down)

    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"
