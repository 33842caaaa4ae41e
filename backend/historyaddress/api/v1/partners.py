from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from historyaddress.api.deps import require_admin
from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.core.db import get_session
from historyaddress.schemas import PartnerIn
from historyaddress.services import partners as partner_service

router = APIRouter()


@router.get("")
def get_partners(
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
    show_all: Optional[str] = Query(default=None, alias="all"),
):
    return partner_service.list_partners(session, cache, (show_all or "").lower() == "true")


@router.get("/{partner_id}")
def get_partner(partner_id: str, session: Session = Depends(get_session)):
    return partner_service.get_partner(session, partner_id).to_dict()


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_partner(
    payload: PartnerIn,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    partner = partner_service.create_partner(session, cache, payload)
    return {"message": "Partner created", "id": partner.id}


@router.put("/{partner_id}", dependencies=[Depends(require_admin)])
def update_partner(
    partner_id: str,
    payload: PartnerIn,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    partner_service.update_partner(session, cache, partner_id, payload)
    return {"message": "Partner updated"}


@router.delete("/{partner_id}", dependencies=[Depends(require_admin)])
def delete_partner(
    partner_id: str,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    partner_service.delete_partner(session, cache, partner_id)
    return {"message": "Partner deleted"}
