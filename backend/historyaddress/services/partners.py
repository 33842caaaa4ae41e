import logging
from datetime import datetime

from sqlmodel import Session, select

from historyaddress.core.cache import TTLCache
from historyaddress.core.config import settings
from historyaddress.core.errors import ConflictError, NotFoundError, ValidationError
from historyaddress.models import Partner
from historyaddress.schemas import PartnerIn
from historyaddress.services.slugs import slugify

logger = logging.getLogger(__name__)


def _apply(partner: Partner, payload: PartnerIn, name: str) -> None:
    partner.name = name
    partner.description = payload.description or ""
    partner.logo_url = payload.logo_url or None
    partner.website = payload.website or None
    partner.instagram = payload.instagram or None
    partner.email = payload.email or None
    partner.published = payload.published
    partner.display_order = payload.display_order or 0


def _require_name(payload: PartnerIn) -> str:
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("Name is required")
    return name


def list_partners(session: Session, cache: TTLCache, show_all: bool = False) -> list[dict]:
    key = f"partners:{int(show_all)}"
    cached = cache.get(key)
    if cached is not None:
        return cached

    query = select(Partner)
    if not show_all:
        query = query.where(Partner.published == True)  # noqa: E712
    query = query.order_by(Partner.display_order, Partner.name)

    partners = [p.to_dict() for p in session.exec(query).all()]
    cache.set(key, partners, settings.PARTNERS_CACHE_TTL)
    return partners


def get_partner(session: Session, partner_id: str) -> Partner:
    partner = session.get(Partner, partner_id)
    if not partner:
        raise NotFoundError("Partner not found")
    return partner


def create_partner(session: Session, cache: TTLCache, payload: PartnerIn) -> Partner:
    name = _require_name(payload)
    partner_id = (payload.id or "").strip() or slugify(name)
    if not partner_id:
        raise ValidationError("Could not derive an id from the name")
    if session.get(Partner, partner_id) is not None:
        raise ConflictError(f"Partner with id '{partner_id}' already exists")

    now = datetime.utcnow()
    partner = Partner(id=partner_id, name=name, created_at=now, updated_at=now)
    _apply(partner, payload, name)

    session.add(partner)
    session.commit()
    session.refresh(partner)
    cache.clear()

    logger.info(f"created partner {partner.id}")
    return partner


def update_partner(session: Session, cache: TTLCache, partner_id: str, payload: PartnerIn) -> Partner:
    partner = get_partner(session, partner_id)
    name = _require_name(payload)

    _apply(partner, payload, name)
    partner.updated_at = datetime.utcnow()

    session.add(partner)
    session.commit()
    session.refresh(partner)
    cache.clear()

    logger.info(f"updated partner {partner.id}")
    return partner


def delete_partner(session: Session, cache: TTLCache, partner_id: str) -> None:
    partner = get_partner(session, partner_id)
    session.delete(partner)
    session.commit()
    cache.clear()

    logger.info(f"deleted partner {partner_id}")
