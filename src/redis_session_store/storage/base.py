"""Abstract base class for session stores.

This is the contract consumed by HTTP session middleware.  All operations
are coroutines.

Classes
-------
- SessionStore  — abstract base for all stores
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from redis_session_store.session.state import Session


class SessionStore(ABC):
    """Protocol for loading, storing, and removing sessions."""

    @abstractmethod
    async def load_session(self, cookie_value: str) -> Session | None:
        """Return the session identified by ``cookie_value``.

        Parameters
        ----------
        cookie_value:
            Value of the client's session cookie.

        Returns
        -------
        Session | None
            The stored session, or ``None`` if no session exists for the
            cookie (never created, expired, or destroyed).

        Raises
        ------
        InvalidCookie
            If ``cookie_value`` is malformed.
        CorruptSessionData
            If the stored value cannot be deserialized.
        """

    @abstractmethod
    async def store_session(self, session: Session) -> str | None:
        """Persist ``session``, overwriting any previous version.

        Returns
        -------
        str | None
            The cookie value to send to the client, or ``None`` if the
            client already holds one.

        Raises
        ------
        SerializationFailure
            If the session holds values that cannot be serialized.
        """

    @abstractmethod
    async def destroy_session(self, session: Session) -> None:
        """Remove ``session``.  Removing an absent session succeeds."""

    @abstractmethod
    async def clear_store(self) -> None:
        """Remove every session in the store."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of sessions in the store."""

    async def aclose(self) -> None:
        """Release resources held by the store.  The default does nothing."""


__all__ = ["SessionStore"]
