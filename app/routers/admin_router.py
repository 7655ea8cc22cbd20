import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from ..dependencies import (
    get_artwork_service,
    get_category_service,
    get_current_admin,
    get_site_settings_service,
)
from ..exceptions import create_success_response
from ..application.ports.artwork_repo import ArtworkFilters
from ..application.services.artwork_service import ArtworkService
from ..application.services.category_service import CategoryService
from ..application.services.site_settings_service import SiteSettingsService
from ..schemas import (
    ArtworkListOut,
    ArtworkOut,
    CategoryOut,
    CreateArtworkRequest,
    CreateCategoryRequest,
    DashboardStats,
    Pagination,
    SiteSettingsOut,
    UpdateArtworkRequest,
    UpdateCategoryRequest,
    UpdateSiteSettingsRequest,
)
from .public_router import category_filter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


def published_filter(value: Optional[str]) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


# ------------------------
# Artworks
# ------------------------
@router.get("/artworks")
def list_artworks(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    featured: Optional[str] = None,
    published: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    service: ArtworkService = Depends(get_artwork_service),
):
    filters = ArtworkFilters(
        category_id=category_filter(category_id),
        featured=True if featured == "true" else None,
        published=published_filter(published),
    )
    artworks, pagination = service.list_artworks(filters, page=page, limit=limit)
    return create_success_response(ArtworkListOut(
        artworks=[ArtworkOut.model_validate(a) for a in artworks],
        pagination=Pagination(**pagination),
    ).to_api())


@router.post("/artworks", status_code=201)
def create_artwork(payload: CreateArtworkRequest, service: ArtworkService = Depends(get_artwork_service)):
    artwork = service.create_artwork(payload.model_dump(exclude_unset=True))
    return create_success_response(
        ArtworkOut.model_validate(artwork).to_api(), message="Artwork created successfully"
    )


@router.put("/artworks")
def update_artwork(
    payload: UpdateArtworkRequest,
    background_tasks: BackgroundTasks,
    service: ArtworkService = Depends(get_artwork_service),
):
    data = payload.model_dump(exclude_unset=True)
    artwork = service.update_artwork(data.pop("id", None), data, schedule=background_tasks.add_task)
    return create_success_response(
        ArtworkOut.model_validate(artwork).to_api(), message="Artwork updated successfully"
    )


@router.delete("/artworks")
def delete_artwork(
    background_tasks: BackgroundTasks,
    id: Optional[str] = None,
    service: ArtworkService = Depends(get_artwork_service),
):
    service.delete_artwork(id, schedule=background_tasks.add_task)
    return create_success_response(message="Artwork deleted successfully")


# ------------------------
# Categories
# ------------------------
@router.get("/categories")
def list_categories(service: CategoryService = Depends(get_category_service)):
    return create_success_response([CategoryOut.model_validate(c).to_api() for c in service.list_categories()])


@router.post("/categories", status_code=201)
def create_category(payload: CreateCategoryRequest, service: CategoryService = Depends(get_category_service)):
    category = service.create_category(payload.name, payload.description)
    return create_success_response(
        CategoryOut.model_validate(category).to_api(), message="Category created successfully"
    )


@router.put("/categories")
def update_category(payload: UpdateCategoryRequest, service: CategoryService = Depends(get_category_service)):
    data = payload.model_dump(exclude_unset=True)
    category = service.update_category(data.pop("id", None), data)
    return create_success_response(
        CategoryOut.model_validate(category).to_api(), message="Category updated successfully"
    )


@router.delete("/categories")
def delete_category(id: Optional[str] = None, service: CategoryService = Depends(get_category_service)):
    service.delete_category(id)
    return create_success_response(message="Category deleted successfully")


# ------------------------
# Site settings
# ------------------------
@router.get("/settings")
def get_settings(service: SiteSettingsService = Depends(get_site_settings_service)):
    return create_success_response(SiteSettingsOut.model_validate(service.get_or_create()).to_api())


@router.put("/settings")
def update_settings(payload: UpdateSiteSettingsRequest, service: SiteSettingsService = Depends(get_site_settings_service)):
    updated = service.update(payload.model_dump(exclude_unset=True))
    return create_success_response(
        SiteSettingsOut.model_validate(updated).to_api(), message="Settings updated successfully"
    )


# ------------------------
# Dashboard
# ------------------------
@router.get("/stats")
def dashboard_stats(service: ArtworkService = Depends(get_artwork_service)):
    return create_success_response(DashboardStats(**service.dashboard_stats()).to_api())
