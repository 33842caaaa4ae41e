"""
first-run import of the bundled homes dataset

runs only when the homes table is empty. accepts a plain json array or the
legacy `people.js` script (`var PEOPLE = [...];` / `window.PEOPLE = [...];`).
"""
import json
import logging
import os
import re
from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from historyaddress.models import Home
from historyaddress.schemas import HomeIn
from historyaddress.services.homes import apply_payload
from historyaddress.services.slugs import slugify

logger = logging.getLogger(__name__)

PEOPLE_JS_RE = re.compile(r'PEOPLE\s*=\s*(\[[\s\S]*\])\s*;?', re.MULTILINE)


def _parse_timestamp(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        value = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def load_seed_records(path: str) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        content = f.read()

    if path.endswith(".js"):
        match = PEOPLE_JS_RE.search(content)
        if not match:
            raise ValueError(f"no PEOPLE array found in {path}")
        content = match.group(1)

    records = json.loads(content)
    if not isinstance(records, list):
        raise ValueError(f"seed file {path} does not contain a list")
    return [r for r in records if isinstance(r, dict)]


def build_home(record: dict) -> Optional[Home]:
    try:
        payload = HomeIn.model_validate(record)
    except PydanticValidationError as e:
        logger.warning(f"skipping seed record {record.get('id') or record.get('name')!r}: {e}")
        return None

    name = (payload.name or "").strip()
    slug = payload.slug or slugify(name)
    if not name or not slug:
        logger.warning(f"skipping seed record without a usable name: {record!r:.60}")
        return None

    now = datetime.utcnow()
    home = Home(
        id=payload.id or slug,
        slug=slug,
        name=name,
        created_at=_parse_timestamp(record.get("created_at")) or now,
        updated_at=_parse_timestamp(record.get("updated_at")) or now,
    )
    apply_payload(home, payload)
    return home


def import_initial_data(session: Session, path: str) -> int:
    """
    import the seed file if there are no homes yet

    the whole import is one transaction; returns the number of homes written
    """
    existing = session.exec(select(func.count()).select_from(Home)).one()
    if existing > 0:
        return 0

    if not os.path.exists(path):
        logger.info(f"no seed file at {path}, starting with an empty store")
        return 0

    try:
        records = load_seed_records(path)
    except (OSError, ValueError) as e:
        logger.error(f"error reading seed file {path}: {e}")
        return 0

    imported = 0
    slug_owners: dict[str, str] = {}
    try:
        for record in records:
            home = build_home(record)
            if home is None:
                continue
            owner = slug_owners.setdefault(home.slug, home.id)
            if owner != home.id:
                logger.warning(f"skipping seed record {home.id!r}: slug {home.slug!r} already used by {owner!r}")
                continue
            session.merge(home)
            imported += 1
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.error(f"seed import from {path} failed, rolled back", exc_info=True)
        raise

    logger.info(f"imported {imported} homes from {path}")
    return imported
