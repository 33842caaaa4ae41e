import pytest

from historyaddress.core import security
from historyaddress.core.config import settings

PASSWORD = "correct horse"


@pytest.fixture(name="protected")
def protected_fixture(monkeypatch):
    token = security.hash_password(PASSWORD)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", token)
    return token


def test_writes_need_token(client, protected):
    """write endpoints reject missing or wrong tokens"""
    response = client.post("/api/homes", json={"name": "Gated"})
    assert response.status_code == 401
    assert "error" in response.json()

    response = client.post("/api/homes", json={"name": "Gated"}, headers={"X-Admin-Token": "deadbeef"})
    assert response.status_code == 403

    response = client.post("/api/homes", json={"name": "Gated"}, headers={"X-Admin-Token": protected})
    assert response.status_code == 201


def test_reads_stay_public(client, protected):
    """reads never need the token"""
    assert client.get("/api/homes").status_code == 200
    assert client.get("/api/partners").status_code == 200


def test_partner_writes_gated(client, protected):
    """partner writes go through the same gate"""
    assert client.post("/api/partners", json={"name": "P"}).status_code == 401
    assert client.delete("/api/partners/p").status_code == 401


def test_login(client, protected):
    """login swaps the password for the token"""
    response = client.post("/api/admin/login", json={"password": PASSWORD})
    assert response.status_code == 200
    assert response.json() == {"token": protected, "protected": True}

    response = client.post("/api/admin/login", json={"password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid password"}


def test_login_without_configured_hash(client):
    """with no hash configured the gate is open"""
    response = client.post("/api/admin/login", json={"password": "anything"})
    assert response.status_code == 200
    assert response.json()["protected"] is False


def test_cache_admin_endpoints(client, cache, protected):
    """cache stats and manual clear"""
    headers = {"X-Admin-Token": protected}
    cache.set("k", "v", 60)
    assert client.get("/api/admin/cache", headers=headers).json()["entries"] == 1
    assert client.post("/api/admin/cache/clear", headers=headers).json() == {"success": True, "cleared": 1}
    assert len(cache) == 0


def test_verify_admin_token(protected):
    """token comparison ignores case and whitespace"""
    assert security.verify_admin_token(protected.upper() + " ")
    assert not security.verify_admin_token("")
    assert security.verify_admin_password(PASSWORD)
    assert not security.verify_admin_password("")
