"""Client-side exceptions."""

from __future__ import annotations

from pdao_contracts import FieldError

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection and try again."
TIMEOUT_MESSAGE = "Request timed out. Please try again."


class ApiError(Exception):
    """A request the API answered with a non-2xx status, or never answered.

    ``status_code`` is 0 when the server could not be reached.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        field: str | None = None,
        errors: list[FieldError] | None = None,
        code: str | None = None,
    ):
        self.status_code = status_code
        self.message = message
        self.field = field
        self.errors = errors or []
        self.code = code
        super().__init__(message)

    @property
    def is_network_error(self) -> bool:
        return self.status_code == 0

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, message={self.message!r})"
