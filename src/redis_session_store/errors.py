"""Exception taxonomy for redis-session-store.

Every error raised by a session store derives from ``SessionStoreError`` so
that hosting middleware can catch the whole family in one place and map the
individual classes onto its own responses (for example ``BackendUnavailable``
as a 5xx, ``InvalidCookie`` as an unauthenticated request).

Classes
-------
- SessionStoreError     — base for all store errors
- BackendUnavailable    — the key-value backend failed to answer a command
- InvalidCookie         — a cookie value could not be decoded
- CorruptSessionData    — a stored value could not be turned back into a Session
- SerializationFailure  — a Session could not be serialized for storage
"""
from __future__ import annotations


class SessionStoreError(Exception):
    """Base class for all redis-session-store errors."""


class BackendUnavailable(SessionStoreError):
    """Raised when a backend command fails.

    Covers connection loss, timeouts, and error replies.  The original
    backend exception is always attached as ``__cause__``.

    Parameters
    ----------
    operation:
        Name of the store operation that was running, e.g. ``"load_session"``.
    reason:
        Short description of the underlying failure.
    """

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Backend unavailable during {operation}: {reason}")


class InvalidCookie(SessionStoreError, ValueError):
    """Raised when a cookie value is malformed and no session id can be derived."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid session cookie: {reason}")


class CorruptSessionData(SessionStoreError, ValueError):
    """Raised when a stored value cannot be deserialized into a Session.

    Parameters
    ----------
    reason:
        Description of the decoding or validation failure.
    key:
        Physical backend key the value was read from, when known.
    """

    def __init__(self, reason: str, key: str | None = None) -> None:
        self.reason = reason
        self.key = key
        where = f" at key {key!r}" if key is not None else ""
        super().__init__(f"Corrupt session data{where}: {reason}")


class SerializationFailure(SessionStoreError, TypeError):
    """Raised when a Session holds values that cannot be serialized."""

    def __init__(self, session_id: str, reason: str) -> None:
        self.session_id = session_id
        self.reason = reason
        super().__init__(f"Cannot serialize session {session_id!r}: {reason}")


__all__ = [
    "BackendUnavailable",
    "CorruptSessionData",
    "InvalidCookie",
    "SerializationFailure",
    "SessionStoreError",
]
