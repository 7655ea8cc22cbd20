import logging
import re
from datetime import datetime, timezone
from typing import Optional

from ...exceptions import ValidationError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ContactService:
    """Accepts contact-form submissions. Nothing is stored; submissions are logged."""

    def submit(self, name: Optional[str], email: Optional[str], subject: Optional[str], message: Optional[str]) -> None:
        if not name or not email or not subject or not message:
            raise ValidationError("All fields are required")
        if not EMAIL_RE.match(email):
            raise ValidationError("Invalid email address")
        logger.info(
            f"Contact form submission: name={name!r} email={email!r} subject={subject!r} "
            f"message_length={len(message)} timestamp={datetime.now(timezone.utc).isoformat()}"
        )
