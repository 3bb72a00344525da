"""Session domain model.

A ``Session`` is identified by an opaque ``id``.  Clients never see the id
directly: they hold a *cookie value*, a random token whose SHA-256 digest is
the id.  Only a freshly created (or regenerated) session knows its cookie
value; a session loaded from a store knows its id only.

Classes
-------
- Session  — identifier, data mapping, and optional expiry
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import json
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar

from pydantic import BaseModel, Field, PrivateAttr, TypeAdapter, field_validator
from pydantic_core import PydanticSerializationError

from redis_session_store.errors import InvalidCookie, SerializationFailure

_COOKIE_BYTES = 64

_ANY_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)

# Glob metacharacters understood by SCAN MATCH.
_PATTERN_METACHARACTERS = frozenset("*?[]\\")

_MISSING = object()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _hash_cookie_bytes(raw: bytes) -> str:
    return base64.urlsafe_b64encode(hashlib.sha256(raw).digest()).decode("ascii")


class Session(BaseModel):
    """A user session: identifier, named values, and optional expiry.

    Parameters
    ----------
    id:
        Opaque identifier.  Must be non-empty and must not contain SCAN
        pattern metacharacters.
    expiry:
        Absolute UTC instant after which the session is expired, or
        ``None`` for a session that never expires.
    data:
        Named values.  Values must be JSON representable.
    """

    COOKIE_BYTES: ClassVar[int] = _COOKIE_BYTES

    id: str
    expiry: datetime | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    _cookie_value: str | None = PrivateAttr(default=None)
    _data_changed: bool = PrivateAttr(default=False)
    _destroyed: bool = PrivateAttr(default=False)

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not value:
            raise ValueError("session id must not be empty")
        bad = _PATTERN_METACHARACTERS.intersection(value)
        if bad:
            raise ValueError(
                f"session id contains pattern metacharacters: {''.join(sorted(bad))!r}"
            )
        return value

    @field_validator("expiry")
    @classmethod
    def _expiry_is_aware(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    # ------------------------------------------------------------------
    # Construction and identity
    # ------------------------------------------------------------------

    @classmethod
    def new(cls) -> Session:
        """Create a session with a fresh random cookie value."""
        raw = secrets.token_bytes(_COOKIE_BYTES)
        session = cls(id=_hash_cookie_bytes(raw))
        session._cookie_value = base64.urlsafe_b64encode(raw).decode("ascii")
        return session

    @staticmethod
    def id_from_cookie_value(cookie_value: str) -> str:
        """Derive the session id from a client-supplied cookie value.

        Raises
        ------
        InvalidCookie
            If ``cookie_value`` is not valid URL-safe base64 or decodes to
            nothing.
        """
        if not cookie_value:
            raise InvalidCookie("empty cookie value")
        try:
            raw = base64.b64decode(
                cookie_value.encode("ascii"), altchars=b"-_", validate=True
            )
        except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
            raise InvalidCookie(str(exc)) from exc
        if not raw:
            raise InvalidCookie("cookie value decodes to zero bytes")
        return _hash_cookie_bytes(raw)

    def regenerate(self) -> None:
        """Replace the id and cookie value, keeping data and expiry."""
        raw = secrets.token_bytes(_COOKIE_BYTES)
        self.id = _hash_cookie_bytes(raw)
        self._cookie_value = base64.urlsafe_b64encode(raw).decode("ascii")
        self._data_changed = True

    def into_cookie_value(self) -> str | None:
        """Return the cookie value to hand to the client, at most once.

        Sessions loaded from a store have no cookie value and return
        ``None``: the client already holds one.
        """
        value, self._cookie_value = self._cookie_value, None
        return value

    @property
    def cookie_value(self) -> str | None:
        return self._cookie_value

    def clone(self) -> Session:
        """Return a deep copy, including the cookie value and change flags."""
        return self.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Data mapping
    # ------------------------------------------------------------------

    def insert(self, key: str, value: Any) -> None:
        """Set ``key`` to the JSON form of ``value``, marking the session as changed.

        The value is stored as it will be read back from a store: tuples and
        sets become lists, ``bytes`` become strings, models become dicts.

        Raises
        ------
        SerializationFailure
            If ``value`` has no JSON representation.
        """
        try:
            value = _ANY_ADAPTER.dump_python(value, mode="json")
            json.dumps(value, allow_nan=False)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationFailure(self.id, f"value for {key!r}: {exc}") from exc
        if self.data.get(key, _MISSING) != value:
            self._data_changed = True
        self.data[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def remove(self, key: str) -> None:
        """Delete ``key`` if present."""
        if key in self.data:
            del self.data[key]
            self._data_changed = True

    def clear(self) -> None:
        if self.data:
            self.data.clear()
            self._data_changed = True

    def __len__(self) -> int:
        return len(self.data)

    def __contains__(self, key: object) -> bool:
        return key in self.data

    @property
    def data_changed(self) -> bool:
        return self._data_changed

    def reset_data_changed(self) -> None:
        self._data_changed = False

    # ------------------------------------------------------------------
    # Expiry
    # ------------------------------------------------------------------

    def set_expiry(self, expiry: datetime) -> None:
        """Expire the session at the absolute instant ``expiry``."""
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        self.expiry = expiry
        self._data_changed = True

    def expire_in(self, ttl: timedelta) -> None:
        """Expire the session ``ttl`` from now."""
        self.set_expiry(_utcnow() + ttl)

    def expires_in(self) -> timedelta | None:
        """Return the time left before expiry.

        ``None`` means the session never expires.  A zero or negative
        value means it has already expired.
        """
        if self.expiry is None:
            return None
        return self.expiry - _utcnow()

    @property
    def is_expired(self) -> bool:
        return self.expiry is not None and self.expiry <= _utcnow()

    def validate_expiry(self) -> Session | None:
        """Return this session if it is still live, else ``None``."""
        return None if self.is_expired else self

    # ------------------------------------------------------------------
    # Destruction
    # ------------------------------------------------------------------

    def destroy(self) -> None:
        """Flag the session for removal by the hosting middleware."""
        self._destroyed = True

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def __repr__(self) -> str:
        return f"Session(id={self.id!r}, expiry={self.expiry!r}, keys={sorted(self.data)!r})"


__all__ = ["Session"]
