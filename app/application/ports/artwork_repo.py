from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Tuple

from .category_repo import CategoryDto


@dataclass
class ArtworkDto:
    id: str
    title: str
    description: Optional[str]
    dimensions: Optional[str]
    image_url: str
    image_key: str
    category_id: str
    is_featured: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryDto] = None


@dataclass
class ArtworkFilters:
    category_id: Optional[str] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    search: Optional[str] = None


class ArtworkRepository(Protocol):
    def list(self, filters: ArtworkFilters, offset: int, limit: int) -> Tuple[List[ArtworkDto], int]:
        ...

    def count(self, filters: ArtworkFilters) -> int:
        ...

    def get(self, artwork_id: str) -> Optional[ArtworkDto]:
        ...

    def create(self, values: Dict[str, Any]) -> ArtworkDto:
        ...

    def update(self, artwork_id: str, changes: Dict[str, Any]) -> ArtworkDto:
        ...

    def delete(self, artwork_id: str) -> None:
        ...
