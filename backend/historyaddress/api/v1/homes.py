from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from historyaddress.api.deps import require_admin
from historyaddress.core.cache import TTLCache, get_cache
from historyaddress.core.db import get_session
from historyaddress.schemas import HomeIn
from historyaddress.services import homes as home_service
from historyaddress.services.query_builder import HomeListParams, list_homes

router = APIRouter()


@router.get("")
def get_homes(
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
    show_all: Optional[str] = Query(default=None, alias="all"),
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    search_mode: Optional[str] = Query(default=None, alias="searchMode"),
    tag: Optional[str] = None,
):
    """paginated summaries, bad page/limit values fall back to defaults"""
    params = HomeListParams.from_query(
        show_all=show_all,
        page=page,
        limit=limit,
        search=search,
        search_mode=search_mode,
        tag=tag,
    )
    return list_homes(session, cache, params)


# registered before /{slug_or_id} so "map" is not read as a slug
@router.get("/map")
def get_map_markers(
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    return home_service.map_markers(session, cache)


@router.get("/{slug_or_id}")
def get_home(
    slug_or_id: str,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    return home_service.get_home(session, cache, slug_or_id)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
def create_home(
    payload: HomeIn,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    home = home_service.create_home(session, cache, payload)
    return {"message": "Home created", "id": home.id, "slug": home.slug}


@router.put("/{home_id}", dependencies=[Depends(require_admin)])
def update_home(
    home_id: str,
    payload: HomeIn,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    home_service.update_home(session, cache, home_id, payload)
    return {"message": "Home updated"}


@router.delete("/{home_id}", dependencies=[Depends(require_admin)])
def delete_home(
    home_id: str,
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache),
):
    home_service.delete_home(session, cache, home_id)
    return {"message": "Home deleted"}
