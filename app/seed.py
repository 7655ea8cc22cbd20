import logging

from sqlmodel import Session

from .config import settings
from .database import create_db_and_tables, engine
from .application.services.auth_service import AuthService
from .application.services.category_service import CategoryService
from .application.services.site_settings_service import SiteSettingsService
from .infrastructure.persistence.sqlalchemy.repositories.admin_repository_sql import SqlAdminRepository
from .infrastructure.persistence.sqlalchemy.repositories.category_repository_sql import SqlCategoryRepository
from .infrastructure.persistence.sqlalchemy.repositories.settings_repository_sql import SqlSiteSettingsRepository

logger = logging.getLogger(__name__)

INITIAL_SETTINGS = {
    "artist_name": "Your Name",
    "artist_bio": "Add your bio here...",
    "artist_journey": "Share your artistic journey...",
    "achievements": "List your achievements...",
    "contact_email": "your@email.com",
}


def seed_admin(bind=None, username: str = None, password: str = None) -> None:
    """Create the admin account, initial site settings and a default category.

    Safe to run repeatedly; existing rows are left alone.
    """
    bind = bind or engine
    create_db_and_tables(bind)
    with Session(bind) as session:
        auth = AuthService(admin_repo=SqlAdminRepository(session))
        username = username or settings.ADMIN_USERNAME
        if auth.ensure_admin(username, password or settings.ADMIN_PASSWORD):
            logger.info(f"Admin user created successfully: {username}")
        else:
            logger.info("Admin user already exists")

        settings_repo = SqlSiteSettingsRepository(session)
        if settings_repo.get() is None:
            SiteSettingsService(settings_repo).update(INITIAL_SETTINGS)
            logger.info("Initial site settings created")

        category_repo = SqlCategoryRepository(session)
        if category_repo.count() == 0:
            category = CategoryService(category_repo).create_category(
                "Paintings", "Traditional and digital paintings"
            )
            logger.info(f"Default category created: {category.name}")
