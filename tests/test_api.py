"""
API response and contract tests.
"""

import httpx
from fastapi.testclient import TestClient

from core.database import DatabaseConnection, get_database_connection
from main import create_app


def test_root_is_public(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"service": "imaginify", "status": "ok"}


def test_health_ok(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "imaginify"


def test_health_ready_reports_database_state(client: TestClient) -> None:
    r = client.get("/health/ready")
    assert r.status_code == 200
    data = r.json()
    assert data["ready"] is True
    assert data["checks"] == {"config": "loaded", "database": "unconfigured"}


def test_health_live(client: TestClient) -> None:
    r = client.get("/health/live")
    assert r.status_code == 200


def test_health_database_unconfigured(client: TestClient) -> None:
    r = client.get("/health/database")
    assert r.status_code == 500
    assert r.json() == {"detail": "Missing MONGODB_URL"}


def test_health_database_connects_lazily(fake_mongo) -> None:
    conn = DatabaseConnection("mongodb://db:27017", "imaginify", client_factory=fake_mongo)
    app = create_app()
    app.dependency_overrides[get_database_connection] = lambda: conn
    client = TestClient(app)

    assert client.get("/health/ready").json()["checks"]["database"] == "unconfigured"
    r = client.get("/health/database")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "imaginify"}
    assert conn.is_connected


def test_secure_headers_present(client: TestClient) -> None:
    r = client.get("/health")
    assert r.headers.get("X-Content-Type-Options") == "nosniff"
    assert r.headers.get("X-Frame-Options") == "DENY"
    assert "X-Response-Time-Ms" in r.headers


def test_query_set(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post(
        "/api/v1/query/set",
        json={"query": "page=1&sort=asc", "key": "page", "value": "2"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"query": "?page=2&sort=asc"}


def test_query_set_validation(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post("/api/v1/query/set", json={"query": "a=1"}, headers=auth_headers)
    assert r.status_code == 422


def test_query_remove(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post(
        "/api/v1/query/remove",
        json={"query": "page=2&filter=&q=null", "keys": ["filter"]},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"query": "?page=2&q=null"}


def test_image_size(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get(
        "/api/v1/images/size",
        params={"type": "fill", "aspect_ratio": "3:4", "dimension": "height"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"dimension": "height", "size": 1334}

    r = client.get(
        "/api/v1/images/size",
        params={"type": "restore", "dimension": "width", "width": 640},
        headers=auth_headers,
    )
    assert r.json()["size"] == 640


def test_image_size_rejects_bad_dimension(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/v1/images/size", params={"dimension": "depth"}, headers=auth_headers)
    assert r.status_code == 422


def test_image_placeholder(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/v1/images/placeholder", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data_url"].startswith("data:image/svg+xml;base64,")


def test_image_download(monkeypatch, client: TestClient, auth_headers: dict[str, str]) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"image-bytes"))
    real_client = httpx.AsyncClient

    def mocked_client(**kwargs) -> httpx.AsyncClient:
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr("utils.download.httpx.AsyncClient", mocked_client)
    r = client.get(
        "/api/v1/images/download",
        params={"url": "https://cdn.example.com/x.png", "filename": "my image"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.content == b"image-bytes"
    assert r.headers["Content-Disposition"] == "attachment; filename*=UTF-8''my_image.png"


def test_image_download_upstream_failure(monkeypatch, client: TestClient, auth_headers: dict[str, str]) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(503))
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        "utils.download.httpx.AsyncClient",
        lambda **kwargs: real_client(transport=transport, **kwargs),
    )
    r = client.get(
        "/api/v1/images/download",
        params={"url": "https://cdn.example.com/x.png"},
        headers=auth_headers,
    )
    assert r.status_code == 502
    assert r.json() == {"detail": "Failed to fetch resource: Service Unavailable"}


def test_image_download_refuses_internal_hosts(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get(
        "/api/v1/images/download",
        params={"url": "http://169.254.169.254/latest/meta-data/"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json() == {"detail": "Resource URL points to a non-public address"}


def test_transformation_config(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post(
        "/api/v1/transformations/recolor/config",
        json={"recolor": {"prompt": "shirt", "to": "blue"}},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {
        "type": "recolor",
        "config": {"recolor": {"prompt": "shirt", "to": "blue", "multiple": True}},
    }


def test_transformation_config_unknown_type(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post("/api/v1/transformations/sharpen/config", json={}, headers=auth_headers)
    assert r.status_code == 404


def test_openapi_available(client: TestClient) -> None:
    """OpenAPI schema should be available for docs and codegen."""
    r = client.get("/openapi.json")
    assert r.status_code == 200
    paths = r.json()["paths"]
    assert "/health" in paths
    assert "/api/v1/query/set" in paths
