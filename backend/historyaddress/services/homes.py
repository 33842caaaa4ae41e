import logging
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select, or_

from historyaddress.core.cache import TTLCache
from historyaddress.core.config import settings
from historyaddress.core.errors import ConflictError, NotFoundError, ValidationError
from historyaddress.models import Home
from historyaddress.models.homes import clean_tags, load_json_list
from historyaddress.schemas import HomeIn
from historyaddress.services.slugs import slugify

logger = logging.getLogger(__name__)

TAGS_CACHE_KEY = "tags"
MAP_CACHE_KEY = "homes:map"


def _require_name(name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    return name


def _resolve_slug(payload: HomeIn, name: str) -> str:
    slug = payload.slug or slugify(name)
    if not slug:
        raise ValidationError("Could not derive a slug from the name")
    return slug


def _find_by_slug(session: Session, slug: str) -> Optional[Home]:
    return session.exec(select(Home).where(Home.slug == slug)).first()


def apply_payload(home: Home, payload: HomeIn) -> None:
    """copy every writable field from the payload, replacing what was there"""
    home.biography = payload.biography
    home.address = payload.address
    if payload.coordinates is not None:
        home.lat = payload.coordinates.lat
        home.lng = payload.coordinates.lng
    else:
        home.lat = None
        home.lng = None
    home.set_lists(
        images=[image.model_dump(exclude_none=True) for image in (payload.images or [])],
        sources=payload.sources or [],
        tags=payload.tags or [],
    )
    home.photo_date = payload.photo_date
    home.published = payload.published
    home.portrait_url = payload.portrait_url
    home.birth_date = payload.birth_date
    home.death_date = payload.death_date


def get_home(session: Session, cache: TTLCache, slug_or_id: str) -> dict:
    key = f"homes:one:{slug_or_id}"
    cached = cache.get(key)
    if cached is not None:
        return cached

    home = session.exec(
        select(Home).where(or_(Home.slug == slug_or_id, Home.id == slug_or_id))
    ).first()
    if not home:
        raise NotFoundError("Home not found")

    result = home.to_full()
    cache.set(key, result, settings.RECORD_CACHE_TTL)
    return result


def create_home(session: Session, cache: TTLCache, payload: HomeIn) -> Home:
    name = _require_name(payload.name)
    slug = _resolve_slug(payload, name)
    home_id = payload.id or slug

    if session.get(Home, home_id) is not None:
        raise ConflictError(f"Home with id '{home_id}' already exists")
    if _find_by_slug(session, slug) is not None:
        raise ConflictError(f"Home with slug '{slug}' already exists")

    now = datetime.utcnow()
    home = Home(id=home_id, slug=slug, name=name, created_at=now, updated_at=now)
    apply_payload(home, payload)

    session.add(home)
    session.commit()
    session.refresh(home)
    cache.clear()

    logger.info(f"created home {home.id}")
    return home


def update_home(session: Session, cache: TTLCache, home_id: str, payload: HomeIn) -> Home:
    home = session.get(Home, home_id)
    if not home:
        raise NotFoundError("Home not found")

    name = _require_name(payload.name)
    slug = _resolve_slug(payload, name)
    other = _find_by_slug(session, slug)
    if other is not None and other.id != home.id:
        raise ConflictError(f"Home with slug '{slug}' already exists")

    home.name = name
    home.slug = slug
    apply_payload(home, payload)
    home.updated_at = datetime.utcnow()

    session.add(home)
    session.commit()
    session.refresh(home)
    cache.clear()

    logger.info(f"updated home {home.id}")
    return home


def delete_home(session: Session, cache: TTLCache, home_id: str) -> None:
    home = session.get(Home, home_id)
    if not home:
        raise NotFoundError("Home not found")

    session.delete(home)
    session.commit()
    cache.clear()

    logger.info(f"deleted home {home_id}")


def list_tags(session: Session, cache: TTLCache) -> list[str]:
    """distinct tags of published homes, sorted case-insensitively"""
    cached = cache.get(TAGS_CACHE_KEY)
    if cached is not None:
        return cached

    tag_set = set()
    for raw in session.exec(select(Home.tags).where(Home.published == True).distinct()).all():  # noqa: E712
        tag_set.update(clean_tags(load_json_list(raw)))

    tags = sorted(tag_set, key=lambda tag: (tag.casefold(), tag))
    cache.set(TAGS_CACHE_KEY, tags, settings.TAGS_CACHE_TTL)
    return tags


def map_markers(session: Session, cache: TTLCache) -> list[dict]:
    cached = cache.get(MAP_CACHE_KEY)
    if cached is not None:
        return cached

    homes = session.exec(
        select(Home)
        .where(Home.published == True)  # noqa: E712
        .where(Home.lat != None)  # noqa: E711
        .where(Home.lng != None)  # noqa: E711
        .order_by(Home.name)
    ).all()

    markers = [
        {"id": h.id, "slug": h.slug, "name": h.name, "lat": h.lat, "lng": h.lng}
        for h in homes
    ]
    cache.set(MAP_CACHE_KEY, markers, settings.MAP_CACHE_TTL)
    return markers


def published_slugs(session: Session) -> list[tuple[str, Optional[datetime]]]:
    rows = session.exec(
        select(Home.slug, Home.updated_at)
        .where(Home.published == True)  # noqa: E712
        .order_by(Home.slug)
    ).all()
    return [(slug, updated_at) for slug, updated_at in rows]
