from fastapi.testclient import TestClient


def test_health(test_client):
    r = test_client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data

def test_version(test_client):
    r = test_client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert "name" in data and "version" in data and "env" in data
    assert data["env"] == "test"
    assert data["llm"] is False

def test_root_redirects_to_docs(test_client):
    r = test_client.get("/", follow_redirects=False)
    assert r.status_code in (301, 302, 307, 308)
    assert "/docs" in r.headers.get("location", "")

def test_cors_allows_configured_origin(test_client):
    r = test_client.options(
        "/v1/chat",
        headers={"Origin": "http://localhost", "Access-Control-Request-Method": "POST"},
    )
    assert r.status_code == 200
    assert r.headers.get("access-control-allow-origin") == "http://localhost"

def test_unexpected_error_returns_500(test_client):
    app = test_client.app

    @app.get("/_test/boom", include_in_schema=False)
    def boom():
        raise RuntimeError("boom")

    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/_test/boom")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
