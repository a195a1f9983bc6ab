from pdao.presentation.api.schemas.address import GeoOptionResponse
from pdao.presentation.api.schemas.auth import AuthResponse, UserResponse, to_public
from pdao.presentation.api.schemas.system import HealthResponse, RootResponse

__all__ = [
    "AuthResponse",
    "GeoOptionResponse",
    "HealthResponse",
    "RootResponse",
    "UserResponse",
    "to_public",
]
