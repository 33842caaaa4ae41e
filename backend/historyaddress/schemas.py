"""
request bodies for the admin write endpoints
"""
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Coordinates(BaseModel):
    # both or neither: a coordinates object must carry lat and lng
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class ImageIn(BaseModel):
    path: str = Field(..., min_length=1)
    caption: Optional[str] = None
    alt: Optional[str] = None


class HomeIn(BaseModel):
    # name is optional here so a missing name surfaces as "Name is required"
    name: Optional[str] = None
    id: Optional[str] = None
    slug: Optional[str] = None
    biography: Optional[str] = None
    address: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    images: Optional[list[ImageIn]] = None
    photo_date: Optional[str] = None
    sources: Optional[list[str]] = None
    tags: Optional[list[str]] = None
    published: bool = True
    portrait_url: Optional[str] = None
    birth_date: Optional[str] = None
    death_date: Optional[str] = None

    @field_validator("id", "slug", "photo_date", "portrait_url", "birth_date", "death_date")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @field_validator("tags")
    @classmethod
    def _drop_blank_tags(cls, value: Optional[list[str]]) -> Optional[list[str]]:
        if value is None:
            return None
        return [tag.strip() for tag in value if tag and tag.strip()]


class PartnerIn(BaseModel):
    name: Optional[str] = None
    id: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website: Optional[str] = None
    instagram: Optional[str] = None
    email: Optional[str] = None
    published: bool = True
    display_order: Optional[int] = 0


class AdminLoginRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=256)
