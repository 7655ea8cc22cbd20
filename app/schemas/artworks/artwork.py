from datetime import datetime
from typing import List, Optional

from ..common.common import CamelModel, Pagination
from ..categories.category import CategoryOut


class ArtworkOut(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    dimensions: Optional[str] = None
    image_url: str
    image_key: str
    category_id: str
    is_featured: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryOut] = None


class ArtworkListOut(CamelModel):
    artworks: List[ArtworkOut]
    pagination: Pagination


class CreateArtworkRequest(CamelModel):
    # presence is checked by ArtworkService so the API answers "Missing required fields"
    title: Optional[str] = None
    description: Optional[str] = None
    dimensions: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = None
    image_key: Optional[str] = None
    is_featured: Optional[bool] = None
    is_published: Optional[bool] = None


class UpdateArtworkRequest(CreateArtworkRequest):
    id: Optional[str] = None


class DashboardStats(CamelModel):
    total_artworks: int
    total_categories: int
    featured_artworks: int
    published_artworks: int
