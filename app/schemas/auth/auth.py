from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ..common.common import CamelModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminOut(CamelModel):
    id: str
    username: str
    created_at: datetime
