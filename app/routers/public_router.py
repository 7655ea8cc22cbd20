import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import (
    get_artwork_service,
    get_category_service,
    get_contact_service,
    get_site_settings_service,
)
from ..exceptions import create_success_response
from ..application.ports.artwork_repo import ArtworkFilters
from ..application.services.artwork_service import ArtworkService
from ..application.services.category_service import CategoryService
from ..application.services.contact_service import ContactService
from ..application.services.site_settings_service import SiteSettingsService
from ..schemas import ArtworkListOut, ArtworkOut, CategoryOut, ContactRequest, Pagination, SiteSettingsOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Gallery"])


def category_filter(category_id: Optional[str]) -> Optional[str]:
    if not category_id or category_id == "all":
        return None
    return category_id


@router.get("/artworks")
def list_artworks(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    featured: Optional[str] = None,
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    service: ArtworkService = Depends(get_artwork_service),
):
    filters = ArtworkFilters(
        category_id=category_filter(category_id),
        featured=True if featured == "true" else None,
        published=True,
        search=search or None,
    )
    artworks, pagination = service.list_artworks(filters, page=page, limit=limit)
    return create_success_response(ArtworkListOut(
        artworks=[ArtworkOut.model_validate(a) for a in artworks],
        pagination=Pagination(**pagination),
    ).to_api())


@router.get("/artworks/{artwork_id}")
def get_artwork(artwork_id: str, service: ArtworkService = Depends(get_artwork_service)):
    artwork = service.get_artwork(artwork_id, published_only=True)
    return create_success_response(ArtworkOut.model_validate(artwork).to_api())


@router.get("/categories")
def list_categories(service: CategoryService = Depends(get_category_service)):
    categories = service.list_public_categories()
    return create_success_response([CategoryOut.model_validate(c).to_api() for c in categories])


@router.get("/settings")
def get_settings(service: SiteSettingsService = Depends(get_site_settings_service)):
    return create_success_response(SiteSettingsOut.model_validate(service.get_public()).to_api())


@router.post("/contact")
def submit_contact(payload: ContactRequest, service: ContactService = Depends(get_contact_service)):
    service.submit(payload.name, payload.email, payload.subject, payload.message)
    return create_success_response(message="Your message has been sent successfully!")
