from fastapi import FastAPI
from fastapi.testclient import TestClient

from historyaddress.core.errors import register_exception_handlers


def test_health_check(client):
    """test basic health endpoint"""
    response = client.get("/health/")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_readiness_check(client):
    """test readiness endpoint reports database and cache"""
    response = client.get("/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"
    assert "entries" in data["checks"]["cache"]


def test_list_homes_empty(client):
    """test homes endpoint on an empty store"""
    response = client.get("/api/homes")
    assert response.status_code == 200
    data = response.json()
    assert data["data"] == []
    assert data["pagination"]["total"] == 0
    assert data["pagination"]["totalPages"] == 0


def test_list_homes_seeded(client, seeded):
    """test homes endpoint with the sample data"""
    response = client.get("/api/homes")
    assert response.status_code == 200
    data = response.json()
    assert data["pagination"]["total"] == 5
    assert len(data["data"]) == 5


def test_list_tags(client, seeded):
    """test tags endpoint"""
    response = client.get("/api/tags")
    assert response.status_code == 200
    assert isinstance(response.json(), list)


def test_list_partners(client):
    """test partners endpoint"""
    response = client.get("/api/partners")
    assert response.status_code == 200
    assert response.json() == []


def test_calendar_endpoints(client):
    """test calendar endpoints answer with empty results"""
    assert client.get("/api/calendar?month=3").json() == {}
    assert client.get("/api/calendar/today").json() == []


def test_unknown_home_is_json_error(client):
    """test errors come back as {"error": ...}"""
    response = client.get("/api/homes/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Home not found"}


def test_unexpected_error_is_json_500():
    """test an unhandled exception still returns a json error body"""
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaboom")

    client = TestClient(app, raise_server_exceptions=False)
    response = client.get("/boom")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
