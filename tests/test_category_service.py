import pytest

from app.application.services.category_service import CategoryService, slugify
from app.exceptions import ConflictError, NotFoundError, ValidationError
from app.infrastructure.persistence.sqlalchemy.repositories.category_repository_sql import SqlCategoryRepository


@pytest.fixture
def service(session):
    return CategoryService(SqlCategoryRepository(session))


def test_slugify():
    assert slugify("Oil & Acrylic!") == "oil-acrylic"
    assert slugify("  Digital Art  ") == "digital-art"


def test_create_and_reject_duplicate(service):
    created = service.create_category("Digital Art", "Pixels")
    assert created.slug == "digital-art"
    with pytest.raises(ConflictError) as err:
        service.create_category("digital art")
    assert err.value.message == "Category name already exists"


def test_create_requires_name(service):
    with pytest.raises(ValidationError):
        service.create_category("")


def test_update_renames_and_reslugs(service, category):
    updated = service.update_category(category.id, {"name": "Oil Paintings"})
    assert updated.slug == "oil-paintings"


def test_update_unknown(service):
    with pytest.raises(NotFoundError):
        service.update_category("missing", {"name": "x"})


def test_delete_blocked_while_artworks_remain(service, category, make_artwork):
    make_artwork("Piece")
    with pytest.raises(ConflictError) as err:
        service.delete_category(category.id)
    assert "Cannot delete category with 1 artworks" in err.value.message


def test_delete_empty_category(service, category):
    service.delete_category(category.id)
    assert service.list_categories() == []


def test_public_categories_only_with_published_artworks(service, category, make_artwork):
    empty = service.create_category("Sketches")
    make_artwork("Draft", is_published=False)
    assert service.list_public_categories() == []

    make_artwork("Live")
    public = service.list_public_categories()
    assert [c.id for c in public] == [category.id]
    assert public[0].artwork_count == 1
    assert empty.id not in [c.id for c in public]
