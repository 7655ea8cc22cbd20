import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..ports.category_repo import CategoryDto, CategoryRepository
from ...exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    return re.sub(r"(^-|-$)", "", re.sub(r"[^a-z0-9]+", "-", name.lower()))


@dataclass
class CategoryService:
    category_repo: CategoryRepository

    def list_categories(self) -> List[CategoryDto]:
        return self.category_repo.list()

    def list_public_categories(self) -> List[CategoryDto]:
        """Categories holding at least one published artwork."""
        return [c for c in self.category_repo.list(published_only=True) if c.artwork_count > 0]

    def create_category(self, name: Optional[str], description: Optional[str] = None) -> CategoryDto:
        if not name:
            raise ValidationError("Category name is required")
        slug = slugify(name)
        if self.category_repo.find_conflict(name, slug):
            raise ConflictError("Category name already exists")
        category = self.category_repo.create(name=name, slug=slug, description=description)
        logger.info(f"Created category {category.slug}")
        return category

    def update_category(self, category_id: Optional[str], data: Dict[str, Any]) -> CategoryDto:
        if not category_id:
            raise ValidationError("Category ID is required")
        if self.category_repo.get(category_id) is None:
            raise NotFoundError("Category not found")

        changes: Dict[str, Any] = {}
        if data.get("name"):
            slug = slugify(data["name"])
            if self.category_repo.find_conflict(data["name"], slug, exclude_id=category_id):
                raise ConflictError("Category name already exists")
            changes["name"] = data["name"]
            changes["slug"] = slug
        if "description" in data:
            changes["description"] = data["description"]
        return self.category_repo.update(category_id, changes)

    def delete_category(self, category_id: Optional[str]) -> None:
        if not category_id:
            raise ValidationError("Category ID is required")
        category = self.category_repo.get(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        if category.artwork_count > 0:
            raise ConflictError(
                f"Cannot delete category with {category.artwork_count} artworks. "
                "Please move or delete the artworks first."
            )
        self.category_repo.delete(category_id)
        logger.info(f"Deleted category {category.slug}")
