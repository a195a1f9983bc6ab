"""Pytest fixtures for API tests.

Each test gets a fresh application backed by an in-memory SQLite database
that lives as long as the TestClient.
"""

from typing import Any, Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import update

from pdao_config import Settings

from pdao.infrastructure.persistence.sqlalchemy import UserModel
from pdao.presentation.api.app import API_PREFIX, create_app


@pytest.fixture
def api_prefix() -> str:
    return API_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key=SecretStr("test-jwt-secret-for-testing-only"),
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        # Cheap hashes keep the suite fast
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(api_settings) -> FastAPI:
    return create_app(settings=api_settings)


@pytest.fixture
def test_client(app):
    """TestClient with the lifespan running, so the database exists."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(test_client, api_prefix, registration_payload) -> Callable[..., Any]:
    """Register a user, optionally overriding payload fields."""

    def _register(**overrides: Any) -> dict[str, Any]:
        response = test_client.post(
            f"{api_prefix}/auth/register",
            json={**registration_payload, **overrides},
        )
        assert response.status_code == 201, (
            f"Registration failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _register


@pytest.fixture
def login(test_client, api_prefix, registration_payload) -> Callable[..., dict[str, str]]:
    """Log in and return bearer auth headers."""

    def _login(
        email: str = registration_payload["email"],
        password: str = registration_payload["password"],
    ) -> dict[str, str]:
        response = test_client.post(
            f"{api_prefix}/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, (
            f"Login failed: {response.status_code} - {response.text}"
        )
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def set_account(test_client, app) -> Callable[..., None]:
    """Change role or status of a stored user, as an administrator would."""

    def _set_account(email: str, **values: str) -> None:
        async def _update() -> None:
            async with app.state.database.session_maker()() as session:
                await session.execute(
                    update(UserModel).where(UserModel.email == email).values(**values),
                )
                await session.commit()

        test_client.portal.call(_update)

    return _set_account
