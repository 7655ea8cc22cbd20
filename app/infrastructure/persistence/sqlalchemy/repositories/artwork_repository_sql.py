from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from .....models import Artwork, utc_now
from .....application.ports.artwork_repo import ArtworkDto, ArtworkFilters, ArtworkRepository
from .category_repository_sql import category_to_dto


def artwork_to_dto(artwork: Artwork, with_category: bool = True) -> ArtworkDto:
    return ArtworkDto(
        id=artwork.id,
        title=artwork.title,
        description=artwork.description,
        dimensions=artwork.dimensions,
        image_url=artwork.image_url,
        image_key=artwork.image_key,
        category_id=artwork.category_id,
        is_featured=artwork.is_featured,
        is_published=artwork.is_published,
        created_at=artwork.created_at,
        updated_at=artwork.updated_at,
        category=category_to_dto(artwork.category) if with_category and artwork.category else None,
    )


class SqlArtworkRepository(ArtworkRepository):
    def __init__(self, session: Session):
        self.session = session

    def _apply_filters(self, statement, filters: ArtworkFilters):
        if filters.category_id:
            statement = statement.where(Artwork.category_id == filters.category_id)
        if filters.featured is not None:
            statement = statement.where(Artwork.is_featured == filters.featured)
        if filters.published is not None:
            statement = statement.where(Artwork.is_published == filters.published)
        if filters.search:
            pattern = f"%{filters.search}%"
            statement = statement.where(
                or_(col(Artwork.title).ilike(pattern), col(Artwork.description).ilike(pattern))
            )
        return statement

    def list(self, filters: ArtworkFilters, offset: int, limit: int) -> Tuple[List[ArtworkDto], int]:
        statement = self._apply_filters(select(Artwork).options(selectinload(Artwork.category)), filters)
        statement = statement.order_by(col(Artwork.created_at).desc()).offset(offset).limit(limit)
        artworks = self.session.exec(statement).all()
        return [artwork_to_dto(a) for a in artworks], self.count(filters)

    def count(self, filters: ArtworkFilters) -> int:
        statement = self._apply_filters(select(func.count()).select_from(Artwork), filters)
        return int(self.session.exec(statement).one())

    def get(self, artwork_id: str) -> Optional[ArtworkDto]:
        artwork = self.session.get(Artwork, artwork_id)
        return artwork_to_dto(artwork) if artwork else None

    def create(self, values: Dict[str, Any]) -> ArtworkDto:
        artwork = Artwork(**values)
        self.session.add(artwork)
        self.session.commit()
        self.session.refresh(artwork)
        return artwork_to_dto(artwork)

    def update(self, artwork_id: str, changes: Dict[str, Any]) -> ArtworkDto:
        artwork = self.session.get(Artwork, artwork_id)
        if artwork is None:
            raise LookupError(artwork_id)
        for name, value in changes.items():
            setattr(artwork, name, value)
        artwork.updated_at = utc_now()
        self.session.add(artwork)
        self.session.commit()
        self.session.refresh(artwork)
        return artwork_to_dto(artwork)

    def delete(self, artwork_id: str) -> None:
        artwork = self.session.get(Artwork, artwork_id)
        if artwork is None:
            return
        self.session.delete(artwork)
        self.session.commit()
