"""API routers."""

from pdao.presentation.api.routers.address import router as address_router
from pdao.presentation.api.routers.auth import router as auth_router
from pdao.presentation.api.routers.users import router as users_router

__all__ = [
    "address_router",
    "auth_router",
    "users_router",
]
