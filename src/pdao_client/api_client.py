"""HTTP client for the PDAO API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from pdao_contracts import FieldError, UserPublic
from pdao_geo import GeoItem

from pdao_client.exceptions import NETWORK_ERROR_MESSAGE, TIMEOUT_MESSAGE, ApiError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@dataclass(frozen=True)
class AuthResult:
    """What register and login hand back on success."""

    user: UserPublic
    token: str
    message: str = ""


def _api_error(response: httpx.Response) -> ApiError:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    errors = [
        FieldError.model_validate(item)
        for item in body.get("errors") or []
        if isinstance(item, dict) and "field" in item and "message" in item
    ]
    return ApiError(
        status_code=response.status_code,
        message=body.get("message") or f"Request failed with status {response.status_code}",
        field=body.get("field"),
        errors=errors,
        code=body.get("code"),
    )


class PDAOApiClient:
    """Async wrapper around the PDAO REST API.

    The bearer token is attached to every request once set, either
    explicitly or by a successful ``register``/``login``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        self._token = token

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> PDAOApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: Any = None,
    ) -> Any:
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        client = await self._get_client()
        try:
            response = await client.request(method, path, json=json, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("PDAO API timeout on %s %s: %s", method, path, e)
            raise ApiError(0, TIMEOUT_MESSAGE) from e
        except httpx.TransportError as e:
            logger.warning("PDAO API connection failed on %s %s: %s", method, path, e)
            raise ApiError(0, NETWORK_ERROR_MESSAGE) from e

        if response.is_error:
            error = _api_error(response)
            logger.debug(
                "PDAO API returned error %d on %s %s: %s",
                response.status_code,
                method,
                path,
                error.message,
            )
            raise error
        return response.json()

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    async def register(self, payload: dict[str, Any]) -> AuthResult:
        """Register a new account; ``payload`` is the raw registration body."""
        body = await self._request("POST", f"{API_PREFIX}/auth/register", json=payload)
        result = self._auth_result(body)
        self._token = result.token
        return result

    async def login(self, email: str, password: str) -> AuthResult:
        body = await self._request(
            "POST",
            f"{API_PREFIX}/auth/login",
            json={"email": email, "password": password},
        )
        result = self._auth_result(body)
        self._token = result.token
        return result

    async def me(self) -> UserPublic:
        body = await self._request("GET", f"{API_PREFIX}/auth/me")
        return UserPublic.model_validate(body["user"])

    @staticmethod
    def _auth_result(body: dict[str, Any]) -> AuthResult:
        return AuthResult(
            user=UserPublic.model_validate(body["user"]),
            token=body["token"],
            message=body.get("message", ""),
        )

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def get_profile(self) -> UserPublic:
        body = await self._request("GET", f"{API_PREFIX}/users/profile")
        return UserPublic.model_validate(body["user"])

    async def update_profile(self, changes: dict[str, Any]) -> UserPublic:
        body = await self._request("PATCH", f"{API_PREFIX}/users/profile", json=changes)
        return UserPublic.model_validate(body["user"])

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    # -------------------------------------------------------------------------
    # Address reference data
    # -------------------------------------------------------------------------

    async def regions(self) -> list[GeoItem]:
        return await self._geo_items(f"{API_PREFIX}/address/regions", None)

    async def provinces(self, region_code: str) -> list[GeoItem]:
        return await self._geo_items(
            f"{API_PREFIX}/address/regions/{region_code}/provinces",
            region_code,
        )

    async def cities(self, province_code: str) -> list[GeoItem]:
        return await self._geo_items(
            f"{API_PREFIX}/address/provinces/{province_code}/cities",
            province_code,
        )

    async def barangays(self, city_code: str) -> list[GeoItem]:
        return await self._geo_items(
            f"{API_PREFIX}/address/cities/{city_code}/barangays",
            city_code,
        )

    async def _geo_items(self, path: str, parent_code: str | None) -> list[GeoItem]:
        body = await self._request("GET", path)
        return [
            GeoItem(code=row["code"], name=row["name"], parent_code=parent_code)
            for row in body
        ]
