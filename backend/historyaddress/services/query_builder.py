"""
list/search/paginate for homes

filter rules:
- published only unless `all=true`
- search words are ANDed; each word must appear (case-insensitive substring)
  in at least one of the searchable fields
- `searchMode=name` narrows the searchable fields to the name
- `tag` is a case-insensitive substring match on any single tag label
- tags are matched label by label through json_each, not against the stored
  json text
"""
import logging
import math
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import String, and_, case, func, literal, or_
from sqlmodel import Session, select

from historyaddress.core.cache import TTLCache
from historyaddress.core.config import settings
from historyaddress.models import Home

logger = logging.getLogger(__name__)

SEARCH_MODE_NAME = "name"
SEARCH_MODE_ALL = "all"

# sources are not searched, tags are matched separately
SEARCH_FIELDS = (Home.name, Home.biography, Home.address)


def _parse_int(raw: Optional[str], default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


class HomeListParams(BaseModel):
    show_all: bool = False
    page: int = 1
    limit: int = 6
    search: str = ""
    search_mode: str = SEARCH_MODE_ALL
    tag: str = ""

    @classmethod
    def from_query(
        cls,
        show_all: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
        search: Optional[str] = None,
        search_mode: Optional[str] = None,
        tag: Optional[str] = None,
    ) -> "HomeListParams":
        """normalize raw query strings, bad numbers fall back to defaults"""
        page_num = _parse_int(page, 1)
        if page_num < 1:
            page_num = 1

        limit_num = _parse_int(limit, settings.DEFAULT_PAGE_SIZE)
        if limit_num < 1:
            limit_num = settings.DEFAULT_PAGE_SIZE
        limit_num = min(limit_num, settings.MAX_PAGE_SIZE)

        mode = (search_mode or "").strip().lower()
        return cls(
            show_all=(show_all or "").strip().lower() == "true",
            page=page_num,
            limit=limit_num,
            search=" ".join((search or "").split()),
            search_mode=SEARCH_MODE_NAME if mode == SEARCH_MODE_NAME else SEARCH_MODE_ALL,
            tag=(tag or "").strip(),
        )

    @property
    def words(self) -> list[str]:
        return self.search.split()

    @property
    def is_filtered(self) -> bool:
        return bool(self.search or self.tag)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def cache_key(self) -> str:
        return (
            f"homes:list:{int(self.show_all)}:{self.page}:{self.limit}:"
            f"{self.search_mode}:{self.search.casefold()}:{self.tag.casefold()}"
        )


def _contains(column, needle: str):
    return func.fold(column, type_=String).contains(needle.casefold(), autoescape=True)


def _tag_contains(needle: str):
    """EXISTS over the tag labels of the outer home row"""
    # malformed json would make json_each raise, read it as no tags
    source = case((func.json_valid(Home.tags) == 1, Home.tags), else_="[]")
    label = func.json_each(source).table_valued("value").alias("tag_label")
    return (
        select(literal(1))
        .select_from(label)
        .where(_contains(label.c.value, needle))
        .exists()
    )


def build_conditions(params: HomeListParams) -> list:
    conditions = []

    if not params.show_all:
        conditions.append(Home.published == True)  # noqa: E712

    for word in params.words:
        if params.search_mode == SEARCH_MODE_NAME:
            conditions.append(_contains(Home.name, word))
        else:
            conditions.append(or_(*[_contains(field, word) for field in SEARCH_FIELDS], _tag_contains(word)))

    if params.tag:
        conditions.append(_tag_contains(params.tag))

    return conditions


def pagination(page: int, limit: int, total: int) -> dict:
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": total_pages,
        "hasNext": page < total_pages,
        "hasPrev": page > 1,
    }


def list_homes(session: Session, cache: TTLCache, params: HomeListParams) -> dict:
    key = params.cache_key()
    cached = cache.get(key)
    if cached is not None:
        return cached

    conditions = build_conditions(params)

    # total first, same predicate without limit/offset
    count_query = select(func.count()).select_from(Home)
    if conditions:
        count_query = count_query.where(and_(*conditions))
    total = session.exec(count_query).one()

    rows = []
    if params.offset < total:
        query = select(Home)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.order_by(Home.name).offset(params.offset).limit(params.limit)
        rows = session.exec(query).all()

    result = {
        "data": [home.to_summary() for home in rows],
        "pagination": pagination(params.page, params.limit, total),
    }

    # an empty unfiltered listing may mean the store is still seeding
    if result["data"] or params.is_filtered:
        cache.set(key, result, settings.LIST_CACHE_TTL)
    else:
        logger.info("unfiltered home listing is empty, not caching")

    return result
