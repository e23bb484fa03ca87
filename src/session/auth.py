"""Signed-in user state, hydrated from and written through a SessionStore."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from src.models.registry import User
from src.session.store import SessionStore

logger = logging.getLogger(__name__)

USER_KEY = "bcx_user"


class AuthSession:
    """Holds the current user for one client session.

    ``is_loading`` stays True until ``hydrate()`` has run, so route guards
    can tell "not signed in" apart from "not yet known".
    """

    def __init__(self, store: SessionStore) -> None:
        self._store = store
        self._user: User | None = None
        self.is_loading = True

    @property
    def user(self) -> User | None:
        return self._user

    def hydrate(self) -> User | None:
        """Restore the user from the store; a corrupt payload counts as signed out."""
        stored = self._store.get(USER_KEY)
        if stored:
            try:
                self._user = User.model_validate_json(stored)
            except ValidationError:
                logger.warning("Discarding unreadable session user payload")
                self._user = None
        self.is_loading = False
        return self._user

    def set_user(self, user: User | None) -> None:
        self._user = user
        if user is None:
            self._store.clear(USER_KEY)
        else:
            self._store.set(USER_KEY, user.model_dump_json())

    def logout(self) -> None:
        self.set_user(None)
