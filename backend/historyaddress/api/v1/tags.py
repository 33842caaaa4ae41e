from fastapi import APIRouter, Depends
from sqlmodel import Session

from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.core.db import get_session
from historyaddress.services.homes import list_tags

router = APIRouter()


@router.get("")
def get_tags(
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    """sorted distinct tags across published homes"""
    return list_tags(session, cache)
