# app/models.py
from typing import Optional, List
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, timezone
import uuid


def _uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    # timestamps are stored timezone-aware, always UTC
    return datetime.now(timezone.utc)


class AdminUser(SQLModel, table=True):
    __tablename__ = "admin_users"

    id: str = Field(default_factory=_uuid, primary_key=True)
    username: str = Field(max_length=100, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: str = Field(default_factory=_uuid, primary_key=True)
    name: str = Field(max_length=100, unique=True, index=True)
    slug: str = Field(max_length=120, unique=True, index=True)
    description: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    artworks: List["Artwork"] = Relationship(back_populates="category")


class Artwork(SQLModel, table=True):
    __tablename__ = "artworks"

    id: str = Field(default_factory=_uuid, primary_key=True)
    title: str = Field(max_length=200)
    description: Optional[str] = Field(default=None)
    dimensions: Optional[str] = Field(default=None, max_length=100)
    # ImageReference: the single canonical image of the artwork
    image_url: str = Field(max_length=500)
    image_key: str = Field(max_length=300)
    category_id: str = Field(foreign_key="categories.id", index=True)
    is_featured: bool = Field(default=False)
    is_published: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)

    category: Optional[Category] = Relationship(back_populates="artworks")


class SiteSettings(SQLModel, table=True):
    __tablename__ = "site_settings"

    id: str = Field(default_factory=_uuid, primary_key=True)
    artist_name: str = Field(default="")
    artist_bio: str = Field(default="")
    artist_journey: str = Field(default="")
    achievements: str = Field(default="")
    contact_email: str = Field(default="")
    contact_phone: str = Field(default="")
    social_instagram: str = Field(default="")
    social_twitter: str = Field(default="")
    social_facebook: str = Field(default="")
    social_linkedin: str = Field(default="")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
