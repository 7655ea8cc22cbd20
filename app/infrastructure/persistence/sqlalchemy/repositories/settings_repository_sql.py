from typing import Any, Dict, Optional

from sqlmodel import Session, select

from .....models import SiteSettings, utc_now
from .....application.ports.settings_repo import SETTINGS_FIELDS, SiteSettingsDto, SiteSettingsRepository


def settings_to_dto(row: SiteSettings) -> SiteSettingsDto:
    values = {name: getattr(row, name) for name in SETTINGS_FIELDS}
    return SiteSettingsDto(id=row.id, created_at=row.created_at, updated_at=row.updated_at, **values)


class SqlSiteSettingsRepository(SiteSettingsRepository):
    def __init__(self, session: Session):
        self.session = session

    def get(self) -> Optional[SiteSettingsDto]:
        row = self.session.exec(select(SiteSettings).order_by(SiteSettings.created_at)).first()
        return settings_to_dto(row) if row else None

    def create(self, values: Dict[str, Any]) -> SiteSettingsDto:
        row = SiteSettings(**values)
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return settings_to_dto(row)

    def update(self, settings_id: str, changes: Dict[str, Any]) -> SiteSettingsDto:
        row = self.session.get(SiteSettings, settings_id)
        if row is None:
            raise LookupError(settings_id)
        for name, value in changes.items():
            setattr(row, name, value)
        row.updated_at = utc_now()
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return settings_to_dto(row)
