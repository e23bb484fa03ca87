"""Session store ABC and in-memory implementation.

Client-side state (signed-in user, cart) is persisted through this
interface instead of touching a global browser store directly. Values are
opaque strings; callers serialize.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class SessionStore(ABC):
    """Key/value store scoped to one client session."""

    @abstractmethod
    def get(self, key: str) -> str | None: ...

    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def clear(self, key: str) -> None: ...


class InMemorySessionStore(SessionStore):
    """Dict-backed store for tests and single-process demos."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self, key: str) -> None:
        self._data.pop(key, None)
