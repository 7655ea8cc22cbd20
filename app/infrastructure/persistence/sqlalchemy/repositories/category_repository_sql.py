from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from .....models import Artwork, Category, utc_now
from .....application.ports.category_repo import CategoryDto, CategoryRepository


def category_to_dto(category: Category, artwork_count: int = 0) -> CategoryDto:
    return CategoryDto(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        created_at=category.created_at,
        updated_at=category.updated_at,
        artwork_count=artwork_count,
    )


class SqlCategoryRepository(CategoryRepository):
    def __init__(self, session: Session):
        self.session = session

    def _artwork_counts(self, published_only: bool) -> Dict[str, int]:
        statement = select(Artwork.category_id, func.count()).group_by(Artwork.category_id)
        if published_only:
            statement = statement.where(Artwork.is_published == True)  # noqa: E712
        return {category_id: int(total) for category_id, total in self.session.exec(statement).all()}

    def list(self, published_only: bool = False) -> List[CategoryDto]:
        counts = self._artwork_counts(published_only)
        categories = self.session.exec(select(Category).order_by(Category.name)).all()
        return [category_to_dto(c, counts.get(c.id, 0)) for c in categories]

    def get(self, category_id: str) -> Optional[CategoryDto]:
        category = self.session.get(Category, category_id)
        if category is None:
            return None
        total = self.session.exec(
            select(func.count()).select_from(Artwork).where(Artwork.category_id == category_id)
        ).one()
        return category_to_dto(category, int(total))

    def find_conflict(self, name: str, slug: str, exclude_id: Optional[str] = None) -> Optional[CategoryDto]:
        statement = select(Category).where(or_(Category.name == name, Category.slug == slug))
        if exclude_id:
            statement = statement.where(col(Category.id) != exclude_id)
        category = self.session.exec(statement).first()
        return category_to_dto(category) if category else None

    def create(self, name: str, slug: str, description: Optional[str]) -> CategoryDto:
        category = Category(name=name, slug=slug, description=description)
        self.session.add(category)
        self.session.commit()
        self.session.refresh(category)
        return category_to_dto(category)

    def update(self, category_id: str, changes: Dict[str, Any]) -> CategoryDto:
        category = self.session.get(Category, category_id)
        if category is None:
            raise LookupError(category_id)
        for name, value in changes.items():
            setattr(category, name, value)
        category.updated_at = utc_now()
        self.session.add(category)
        self.session.commit()
        return self.get(category_id)

    def delete(self, category_id: str) -> None:
        category = self.session.get(Category, category_id)
        if category is None:
            return
        self.session.delete(category)
        self.session.commit()

    def count(self) -> int:
        return int(self.session.exec(select(func.count()).select_from(Category)).one())
