"""Session state for the client: who is signed in and with which token."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pdao_contracts import UserPublic

logger = logging.getLogger(__name__)


class AuthStore:
    """
    Holds the signed-in user, the bearer token and transient UI flags.

    When ``storage_path`` is given, ``user``, ``token`` and
    ``is_authenticated`` survive restarts as a small JSON document. The
    loading flag and the error message are never persisted.
    """

    def __init__(self, storage_path: Path | str | None = None):
        self._storage_path = Path(storage_path) if storage_path else None
        self.user: UserPublic | None = None
        self.token: str | None = None
        self.is_authenticated = False
        self.is_loading = False
        self.error: str | None = None
        self._restore()

    def login(self, user: UserPublic, token: str) -> None:
        self._sign_in(user, token)

    def register(self, user: UserPublic, token: str) -> None:
        self._sign_in(user, token)

    def _sign_in(self, user: UserPublic, token: str) -> None:
        self.user = user
        self.token = token
        self.is_authenticated = True
        self.is_loading = False
        self.error = None
        self._persist()

    def logout(self) -> None:
        self.user = None
        self.token = None
        self.is_authenticated = False
        self.is_loading = False
        self.error = None
        self._persist()

    def set_loading(self, loading: bool) -> None:
        self.is_loading = loading

    def set_error(self, error: str | None) -> None:
        self.error = error

    def clear_error(self) -> None:
        self.error = None

    def update_user(self, changes: dict[str, Any] | UserPublic) -> None:
        """Merge changes onto the current user; a no-op when signed out."""
        if self.user is None:
            return
        if isinstance(changes, UserPublic):
            self.user = changes
        else:
            merged = {**self.user.model_dump(), **changes}
            self.user = UserPublic.model_validate(merged)
        self._persist()

    # Persistence
    def _persist(self) -> None:
        if self._storage_path is None:
            return
        state = {
            "user": self.user.model_dump(mode="json") if self.user else None,
            "token": self.token,
            "is_authenticated": self.is_authenticated,
        }
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._storage_path.write_text(json.dumps(state), encoding="utf-8")

    def _restore(self) -> None:
        if self._storage_path is None or not self._storage_path.exists():
            return
        try:
            state = json.loads(self._storage_path.read_text(encoding="utf-8"))
            user = state.get("user")
            self.user = UserPublic.model_validate(user) if user else None
            self.token = state.get("token")
            self.is_authenticated = bool(state.get("is_authenticated")) and bool(
                self.token,
            )
        except (OSError, ValueError, ValidationError, AttributeError) as e:
            logger.warning("Ignoring unreadable auth state %s: %s", self._storage_path, e)
            self.user = None
            self.token = None
            self.is_authenticated = False
