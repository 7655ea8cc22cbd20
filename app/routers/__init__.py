# Routers package
from . import auth_router
from . import uploads_router
from . import public_router
from . import admin_router

__all__ = [
    "auth_router",
    "uploads_router",
    "public_router",
    "admin_router",
]
