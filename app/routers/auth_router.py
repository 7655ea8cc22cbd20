import logging

from fastapi import APIRouter, Depends, Response

from ..config import settings
from ..dependencies import get_auth_service, get_current_admin
from ..exceptions import create_success_response
from ..application.ports.admin_repo import AdminDto
from ..application.services.auth_service import AuthService
from ..schemas import AdminOut, LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/login")
def login(payload: LoginRequest, response: Response, auth: AuthService = Depends(get_auth_service)):
    token = auth.login(payload.username, payload.password)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    logger.info(f"Admin {payload.username} logged in")
    return create_success_response(TokenResponse(access_token=token).model_dump())


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return create_success_response(message="Logged out")


@router.get("/me")
def me(admin: AdminDto = Depends(get_current_admin)):
    return create_success_response(AdminOut.model_validate(admin).to_api())
