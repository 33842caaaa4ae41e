import pytest

from historyaddress.core.config import settings


@pytest.fixture(name="static_dir")
def static_dir_fixture(tmp_path, monkeypatch):
    (tmp_path / "index.html").write_text("<h1>home</h1>", encoding="utf-8")
    (tmp_path / "about.html").write_text("<h1>about</h1>", encoding="utf-8")
    monkeypatch.setattr(settings, "STATIC_DIR", str(tmp_path))
    return tmp_path


def test_robots_txt(client):
    """robots hides the admin page and points at the sitemap"""
    response = client.get("/robots.txt")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert f"Disallow: /{settings.ADMIN_PAGE}" in response.text
    assert f"Sitemap: {settings.SITE_DOMAIN}/sitemap.xml" in response.text


def test_sitemap_lists_published_homes(client, seeded):
    """sitemap has the static pages and one url per published home"""
    client.post("/api/homes", json={"name": "Draft", "published": False})

    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    body = response.text
    assert body.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert f"<loc>{settings.SITE_DOMAIN}/map.html</loc>" in body
    assert "address.html?slug=vasil-levski</loc>" in body
    assert "<lastmod>2025-11-07</lastmod>" in body
    assert "slug=draft" not in body
    assert body.count("<url>") == 5 + 5


def test_index_and_pages(client, static_dir):
    """html pages are served from the static directory"""
    assert client.get("/").text == "<h1>home</h1>"
    response = client.get("/about.html")
    assert response.status_code == 200
    assert "about" in response.text


def test_missing_page(client, static_dir):
    """unknown pages are a plain 404"""
    response = client.get("/nowhere.html")
    assert response.status_code == 404
    assert response.text == "Page not found"
