from datetime import datetime
from typing import Optional

from ..common.common import CamelModel


class SiteSettingsOut(CamelModel):
    id: str
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
    created_at: datetime
    updated_at: datetime


class UpdateSiteSettingsRequest(CamelModel):
    artist_name: Optional[str] = None
    artist_bio: Optional[str] = None
    artist_journey: Optional[str] = None
    achievements: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    social_instagram: Optional[str] = None
    social_twitter: Optional[str] = None
    social_facebook: Optional[str] = None
    social_linkedin: Optional[str] = None
