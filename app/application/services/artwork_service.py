import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..ports.artwork_repo import ArtworkDto, ArtworkFilters, ArtworkRepository
from ..ports.category_repo import CategoryRepository
from .cleanup_service import CleanupCoordinator
from ...exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

# receives (CleanupCoordinator.discard, key); FastAPI's BackgroundTasks.add_task fits
Scheduler = Callable[..., None]


def _run_now(func: Callable[..., Any], *args: Any) -> None:
    func(*args)


def paginate(total: int, page: int, limit: int) -> Dict[str, int]:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": math.ceil(total / limit) if limit else 0,
    }


@dataclass
class ArtworkService:
    artwork_repo: ArtworkRepository
    category_repo: CategoryRepository
    cleanup: CleanupCoordinator

    def list_artworks(self, filters: ArtworkFilters, page: int, limit: int):
        offset = (page - 1) * limit
        artworks, total = self.artwork_repo.list(filters, offset=offset, limit=limit)
        return artworks, paginate(total, page, limit)

    def get_artwork(self, artwork_id: str, published_only: bool = False) -> ArtworkDto:
        artwork = self.artwork_repo.get(artwork_id)
        if artwork is None or (published_only and not artwork.is_published):
            raise NotFoundError("Artwork not found")
        return artwork

    def _require_category(self, category_id: str) -> None:
        if self.category_repo.get(category_id) is None:
            raise ValidationError("Category not found")

    def create_artwork(self, data: Dict[str, Any]) -> ArtworkDto:
        required = ("title", "category_id", "image_url", "image_key")
        if any(not data.get(name) for name in required):
            raise ValidationError("Missing required fields")
        self._require_category(data["category_id"])

        artwork = self.artwork_repo.create({
            "title": data["title"],
            "description": data.get("description"),
            "dimensions": data.get("dimensions"),
            "image_url": data["image_url"],
            "image_key": data["image_key"],
            "category_id": data["category_id"],
            "is_featured": bool(data.get("is_featured") or False),
            "is_published": data.get("is_published") is not False,
        })
        logger.info(f"Created artwork {artwork.id} ({artwork.title})")
        return artwork

    def update_artwork(self, artwork_id: Optional[str], data: Dict[str, Any],
                       schedule: Optional[Scheduler] = None) -> ArtworkDto:
        """Apply a partial update.

        A new image_key replaces the artwork's image reference; the previous
        key is handed to cleanup only after the update has been committed.
        """
        if not artwork_id:
            raise ValidationError("Artwork ID is required")
        existing = self.artwork_repo.get(artwork_id)
        if existing is None:
            raise NotFoundError("Artwork not found")

        changes: Dict[str, Any] = {}
        if data.get("title"):
            changes["title"] = data["title"]
        for name in ("description", "dimensions"):
            if name in data:
                changes[name] = data[name]
        if data.get("category_id"):
            self._require_category(data["category_id"])
            changes["category_id"] = data["category_id"]
        for name in ("is_featured", "is_published"):
            if data.get(name) is not None:
                changes[name] = bool(data[name])

        new_key = data.get("image_key")
        if new_key and new_key != existing.image_key:
            if not data.get("image_url"):
                raise ValidationError("imageUrl is required when replacing the image")
            changes["image_url"] = data["image_url"]
            changes["image_key"] = new_key

        artwork = self.artwork_repo.update(artwork_id, changes)
        if "image_key" in changes:
            logger.info(f"Artwork {artwork_id} image replaced; releasing {existing.image_key}")
            (schedule or _run_now)(self.cleanup.discard, existing.image_key)
        return artwork

    def delete_artwork(self, artwork_id: Optional[str], schedule: Optional[Scheduler] = None) -> ArtworkDto:
        """Delete the record, then release its image. Cleanup cannot undo the delete."""
        if not artwork_id:
            raise ValidationError("Artwork ID is required")
        artwork = self.artwork_repo.get(artwork_id)
        if artwork is None:
            raise NotFoundError("Artwork not found")

        self.artwork_repo.delete(artwork_id)
        logger.info(f"Deleted artwork {artwork_id}")
        (schedule or _run_now)(self.cleanup.discard, artwork.image_key)
        return artwork

    def dashboard_stats(self) -> Dict[str, int]:
        return {
            "total_artworks": self.artwork_repo.count(ArtworkFilters()),
            "total_categories": self.category_repo.count(),
            "featured_artworks": self.artwork_repo.count(ArtworkFilters(featured=True)),
            "published_artworks": self.artwork_repo.count(ArtworkFilters(published=True)),
        }
