from dataclasses import dataclass
from typing import Any, Dict

from ..ports.settings_repo import SETTINGS_FIELDS, SiteSettingsDto, SiteSettingsRepository


@dataclass
class SiteSettingsService:
    settings_repo: SiteSettingsRepository

    def get_public(self) -> SiteSettingsDto:
        # visitors get blank values rather than a freshly written row
        return self.settings_repo.get() or SiteSettingsDto()

    def get_or_create(self) -> SiteSettingsDto:
        existing = self.settings_repo.get()
        if existing is not None:
            return existing
        return self.settings_repo.create({name: "" for name in SETTINGS_FIELDS})

    def update(self, data: Dict[str, Any]) -> SiteSettingsDto:
        changes = {name: data[name] for name in SETTINGS_FIELDS if data.get(name) is not None}
        existing = self.settings_repo.get()
        if existing is None:
            values = {name: changes.get(name, "") for name in SETTINGS_FIELDS}
            return self.settings_repo.create(values)
        return self.settings_repo.update(existing.id, changes)
