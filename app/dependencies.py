from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from .config import settings
from .database import get_session
from .application.ports.admin_repo import AdminDto
from .application.ports.storage_repo import ObjectStore
from .application.services.artwork_service import ArtworkService
from .application.services.auth_service import AuthService
from .application.services.category_service import CategoryService
from .application.services.cleanup_service import CleanupCoordinator
from .application.services.contact_service import ContactService
from .application.services.image_service import ImageUploadService
from .application.services.site_settings_service import SiteSettingsService
from .infrastructure.persistence.sqlalchemy.repositories.admin_repository_sql import SqlAdminRepository
from .infrastructure.persistence.sqlalchemy.repositories.artwork_repository_sql import SqlArtworkRepository
from .infrastructure.persistence.sqlalchemy.repositories.category_repository_sql import SqlCategoryRepository
from .infrastructure.persistence.sqlalchemy.repositories.settings_repository_sql import SqlSiteSettingsRepository

# Auth scheme
oauth2_scheme = HTTPBearer(auto_error=False)


def get_object_store(request: Request) -> ObjectStore:
    return request.app.state.object_store


def get_cleanup_coordinator(store: ObjectStore = Depends(get_object_store)) -> CleanupCoordinator:
    return CleanupCoordinator(store)


def get_upload_service(request: Request, store: ObjectStore = Depends(get_object_store)) -> ImageUploadService:
    return ImageUploadService(object_store=store, options=request.app.state.compression_options)


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthService(admin_repo=SqlAdminRepository(session))


def get_artwork_service(
    session: Session = Depends(get_session),
    cleanup: CleanupCoordinator = Depends(get_cleanup_coordinator),
) -> ArtworkService:
    return ArtworkService(
        artwork_repo=SqlArtworkRepository(session),
        category_repo=SqlCategoryRepository(session),
        cleanup=cleanup,
    )


def get_category_service(session: Session = Depends(get_session)) -> CategoryService:
    return CategoryService(category_repo=SqlCategoryRepository(session))


def get_site_settings_service(session: Session = Depends(get_session)) -> SiteSettingsService:
    return SiteSettingsService(settings_repo=SqlSiteSettingsRepository(session))


def get_contact_service() -> ContactService:
    return ContactService()


# Dependency to get current admin from JWT (bearer header, falling back to the session cookie)
def get_current_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> AdminDto:
    token = None
    if credentials and credentials.credentials:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    return auth.resolve(token)
