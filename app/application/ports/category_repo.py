from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


@dataclass
class CategoryDto:
    id: str
    name: str
    slug: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
    artwork_count: int = 0


class CategoryRepository(Protocol):
    def list(self, published_only: bool = False) -> List[CategoryDto]:
        ...

    def get(self, category_id: str) -> Optional[CategoryDto]:
        ...

    def find_conflict(self, name: str, slug: str, exclude_id: Optional[str] = None) -> Optional[CategoryDto]:
        ...

    def create(self, name: str, slug: str, description: Optional[str]) -> CategoryDto:
        ...

    def update(self, category_id: str, changes: Dict[str, Any]) -> CategoryDto:
        ...

    def delete(self, category_id: str) -> None:
        ...

    def count(self) -> int:
        ...
