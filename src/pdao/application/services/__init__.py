from pdao.application.services.authentication_service import AuthenticationService
from pdao.application.services.profile_service import ProfileService

__all__ = [
    "AuthenticationService",
    "ProfileService",
]
