import json
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Index, Text
from sqlmodel import SQLModel, Field

logger = logging.getLogger(__name__)


def load_json_list(raw: Optional[str]) -> list:
    """parse a json list column, anything malformed reads as an empty list"""
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning(f"malformed json list column: {str(raw)[:40]!r}")
        return []
    return value if isinstance(value, list) else []


def clean_tags(values: list) -> list:
    return [str(tag) for tag in values if tag is not None and str(tag).strip()]


def dump_json_list(value: Optional[list]) -> str:
    return json.dumps(list(value or []), ensure_ascii=False)


class Home(SQLModel, table=True):
    __tablename__ = "homes"
    __table_args__ = (Index("idx_homes_dates", "birth_date", "death_date"),)

    id: str = Field(primary_key=True)
    slug: str = Field(unique=True, index=True)
    name: str = Field(index=True)
    biography: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    address: Optional[str] = Field(default=None, nullable=True)
    lat: Optional[float] = Field(default=None, nullable=True)
    lng: Optional[float] = Field(default=None, nullable=True)

    # json encoded lists, read through images_list / sources_list / tags_list
    images: str = Field(default="[]", sa_column=Column(Text, nullable=False, default="[]"))
    sources: str = Field(default="[]", sa_column=Column(Text, nullable=False, default="[]"))
    tags: str = Field(default="[]", sa_column=Column(Text, nullable=False, default="[]"))

    photo_date: Optional[str] = Field(default=None, nullable=True)
    portrait_url: Optional[str] = Field(default=None, nullable=True)
    birth_date: Optional[str] = Field(default=None, nullable=True)  # YYYY-MM-DD
    death_date: Optional[str] = Field(default=None, nullable=True)  # YYYY-MM-DD

    published: bool = Field(default=True, index=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def images_list(self) -> list:
        return [img for img in load_json_list(self.images) if isinstance(img, dict)]

    @property
    def sources_list(self) -> list:
        return [str(src) for src in load_json_list(self.sources) if src is not None]

    @property
    def tags_list(self) -> list:
        return clean_tags(load_json_list(self.tags))

    def set_lists(self, images: Optional[list] = None, sources: Optional[list] = None, tags: Optional[list] = None) -> None:
        self.images = dump_json_list(images)
        self.sources = dump_json_list(sources)
        self.tags = dump_json_list(tags)

    @property
    def coordinates(self) -> Optional[dict]:
        if self.lat is None or self.lng is None:
            return None
        return {"lat": self.lat, "lng": self.lng}

    def to_summary(self) -> dict:
        """list view projection: no biography and at most the first image"""
        images = self.images_list
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "address": self.address or "",
            "coordinates": self.coordinates,
            "images": images[:1],
            "tags": self.tags_list,
            "published": self.published,
        }

    def to_full(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "name": self.name,
            "biography": self.biography,
            "address": self.address,
            "coordinates": self.coordinates,
            "images": self.images_list,
            "photo_date": self.photo_date,
            "sources": self.sources_list,
            "tags": self.tags_list,
            "published": self.published,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "portrait_url": self.portrait_url,
            "birth_date": self.birth_date,
            "death_date": self.death_date,
        }
