"""Fixtures for the client-side state tests."""

from typing import Any
from uuid import uuid4

import pytest

from pdao_contracts import UserPublic


@pytest.fixture
def user_json() -> dict[str, Any]:
    """A user as the API serializes it."""
    return {
        "id": str(uuid4()),
        "user_id": "PDAO-20240601-ABCDE",
        "form_id": None,
        "first_name": "Juan",
        "middle_name": "Santos",
        "last_name": "Dela Cruz",
        "suffix": "Jr.",
        "sex": "Male",
        "age": 34,
        "date_of_birth": "1990-05-15",
        "address": {
            "street": "123 Rizal Street",
            "barangay": "Bonuan Binloc",
            "city_municipality": "Dagupan City",
            "province": "Pangasinan",
            "region": "Region I",
            "zip_code": "2400",
            "country": "Philippines",
            "type": "Permanent",
            "coordinates": None,
        },
        "contact_number": "09171234567",
        "avatar_url": None,
        "email": "juan.delacruz@example.com",
        "role": "User",
        "status": "Pending",
        "is_verified": False,
        "is_email_verified": False,
        "created_at": "2024-06-01T08:00:00+00:00",
        "updated_at": "2024-06-01T08:00:00+00:00",
        "full_name": "Juan Santos Dela Cruz Jr.",
        "age_display": "34 years",
        "is_pwd_verified": False,
    }


@pytest.fixture
def public_user(user_json) -> UserPublic:
    return UserPublic.model_validate(user_json)
