"""
robots.txt, sitemap.xml and the static html pages
"""
import os
import re

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse, PlainTextResponse, Response
from sqlmodel import Session

from historyaddress.core.config import settings
from historyaddress.core.db import get_session
from historyaddress.services.homes import published_slugs
from historyaddress.services.sitemap import robots_txt, sitemap_xml

router = APIRouter()

PAGE_NAME_RE = re.compile(r'^[A-Za-z0-9_-]+$')


def _page_response(filename: str):
    path = os.path.join(settings.STATIC_DIR, filename)
    if os.path.isfile(path):
        return FileResponse(path, media_type="text/html")
    return PlainTextResponse("Page not found", status_code=404)


@router.get("/robots.txt", response_class=PlainTextResponse)
def get_robots():
    return robots_txt(settings.SITE_DOMAIN, settings.ADMIN_PAGE)


@router.get("/sitemap.xml")
def get_sitemap(session: Session = Depends(get_session)):
    xml = sitemap_xml(settings.SITE_DOMAIN, published_slugs(session))
    return Response(content=xml, media_type="application/xml")


@router.get("/", include_in_schema=False)
def index_page():
    return _page_response("index.html")


@router.get("/{page}.html", include_in_schema=False)
def html_page(page: str):
    if not PAGE_NAME_RE.match(page):
        return PlainTextResponse("Page not found", status_code=404)
    return _page_response(f"{page}.html")
