from datetime import datetime
from typing import Optional

from ..common.common import CamelModel


class CategoryOut(CamelModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    artwork_count: int = 0
    created_at: datetime
    updated_at: datetime


class CreateCategoryRequest(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None


class UpdateCategoryRequest(CamelModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
