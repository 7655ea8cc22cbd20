from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol


@dataclass
class SiteSettingsDto:
    id: str = ""
    artist_name: str = ""
    artist_bio: str = ""
    artist_journey: str = ""
    achievements: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    social_instagram: str = ""
    social_twitter: str = ""
    social_facebook: str = ""
    social_linkedin: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


SETTINGS_FIELDS = tuple(
    f.name for f in fields(SiteSettingsDto) if f.name not in ("id", "created_at", "updated_at")
)


class SiteSettingsRepository(Protocol):
    def get(self) -> Optional[SiteSettingsDto]:
        ...

    def create(self, values: Dict[str, Any]) -> SiteSettingsDto:
        ...

    def update(self, settings_id: str, changes: Dict[str, Any]) -> SiteSettingsDto:
        ...
