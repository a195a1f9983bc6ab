"""PDAO Client - API client and form state for the registration app.

    from pdao_client import AuthStore, PDAOApiClient, RegistrationForm

    async with PDAOApiClient("http://localhost:5000") as client:
        form = RegistrationForm(client, AuthStore())
        form.set_field("first_name", "Juan")
        ...
        result = await form.submit()
"""

from pdao_client.address_picker import (
    AddressPicker,
    AddressSource,
    HttpAddressSource,
    StaticAddressSource,
)
from pdao_client.api_client import AuthResult, PDAOApiClient
from pdao_client.auth_store import AuthStore
from pdao_client.exceptions import ApiError
from pdao_client.forms import LoginForm, RegistrationForm, RegistrationStep

__all__ = [
    # API
    "ApiError",
    "AuthResult",
    "PDAOApiClient",
    # State
    "AuthStore",
    "LoginForm",
    "RegistrationForm",
    "RegistrationStep",
    # Address picker
    "AddressPicker",
    "AddressSource",
    "HttpAddressSource",
    "StaticAddressSource",
]
