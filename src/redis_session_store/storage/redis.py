"""Redis-backed session store.

Each session is stored as a Redis string holding its full serialized state
under the key ``<prefix><session id>``.  When the session has an expiry the
key is also given a native Redis TTL for the same instant, so Redis evicts
it without any help from this process.

Whole-store operations depend on whether a prefix is configured:

- Without a prefix, ``count`` uses ``DBSIZE`` and ``clear_store`` uses
  ``FLUSHALL``.  **Both act on the entire Redis database**, including keys
  that have nothing to do with sessions.  Only run unprefixed stores
  against a database dedicated to them.
- With a prefix, both enumerate the namespace with SCAN first.  This is
  not atomic: a ``clear_store`` racing a concurrent ``store_session`` may
  or may not remove the new key.

No operation is retried.  Any Redis failure is raised to the caller as
``BackendUnavailable`` with the original exception as its cause.

Classes
-------
- RedisSessionStore  — redis.asyncio-backed ``SessionStore``
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta
from typing import Any

import redis.asyncio as redis_asyncio
from redis.exceptions import RedisError

from redis_session_store.config import RedisStoreConfig
from redis_session_store.errors import BackendUnavailable
from redis_session_store.session.serializer import SessionSerializer
from redis_session_store.session.state import Session
from redis_session_store.storage.base import SessionStore
from redis_session_store.storage.keys import KeyNamespace
from redis_session_store.storage.scan import KeyScanner

logger = logging.getLogger(__name__)

_ONE_MILLISECOND = timedelta(milliseconds=1)


@contextmanager
def _backend_errors(operation: str) -> Iterator[None]:
    """Re-raise any Redis failure inside the block as ``BackendUnavailable``."""
    try:
        yield
    except RedisError as exc:
        logger.warning("RedisSessionStore: %s failed: %r", operation, exc)
        raise BackendUnavailable(operation, str(exc) or type(exc).__name__) from exc


def ttl_milliseconds(expires_in: timedelta | None) -> int | None:
    """Convert a session's remaining lifetime into a ``PX`` argument.

    ``None`` (no expiry) maps to no TTL.  A session that has already
    expired gets the minimum TTL of 1 ms so Redis drops it at once instead
    of keeping it forever.
    """
    if expires_in is None:
        return None
    return max(1, int(expires_in / _ONE_MILLISECOND))


class RedisSessionStore(SessionStore):
    """Persists sessions in Redis using ``redis.asyncio``.

    The client owns a connection pool and is shared by every concurrent
    call; the store itself holds no mutable state besides it.

    Parameters
    ----------
    client:
        A connected ``redis.asyncio.Redis`` client.  Creating it with
        ``decode_responses=True`` is recommended but not required.
    prefix:
        Optional key namespace.  See the module docstring for how it
        changes ``count`` and ``clear_store``.
    scan_page_size:
        ``COUNT`` hint for SCAN pages when enumerating a namespace.
    serializer:
        Optional custom serializer.
    """

    def __init__(
        self,
        client: Any,
        prefix: str | None = None,
        *,
        scan_page_size: int = 100,
        serializer: SessionSerializer | None = None,
    ) -> None:
        self._client = client
        self._namespace = KeyNamespace(prefix)
        self._scan_page_size = scan_page_size
        self._serializer = serializer or SessionSerializer()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def from_url(
        cls, url: str, prefix: str | None = None, **client_kwargs: Any
    ) -> RedisSessionStore:
        """Create a store with its own pooled client connected to ``url``."""
        client_kwargs.setdefault("decode_responses", True)
        client = redis_asyncio.Redis.from_url(url, **client_kwargs)
        return cls(client, prefix)

    @classmethod
    def from_config(cls, config: RedisStoreConfig) -> RedisSessionStore:
        """Create a store from a ``RedisStoreConfig``."""
        client = redis_asyncio.Redis.from_url(config.url, **config.connection_kwargs())
        return cls(client, config.prefix, scan_page_size=config.scan_page_size)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def prefix(self) -> str | None:
        return self._namespace.prefix

    @property
    def client(self) -> Any:
        return self._client

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _key(self, session_id: str) -> str:
        return self._namespace.physical_key(session_id)

    async def _ids(self) -> frozenset[str] | None:
        """Return every string key in the namespace, or ``None`` if empty."""
        scanner = KeyScanner(
            self._client, self._namespace.pattern(), page_size=self._scan_page_size
        )
        return await scanner.collect()

    # ------------------------------------------------------------------
    # SessionStore interface
    # ------------------------------------------------------------------

    async def load_session(self, cookie_value: str) -> Session | None:
        session_id = Session.id_from_cookie_value(cookie_value)
        key = self._key(session_id)
        with _backend_errors("load_session"):
            raw = await self._client.get(key)
        if raw is None:
            logger.debug("RedisSessionStore: no session at %r", key)
            return None
        session = self._serializer.from_json(raw, key=key)
        logger.debug("RedisSessionStore: loaded session %r", key)
        return session

    async def store_session(self, session: Session) -> str | None:
        key = self._key(session.id)
        payload = self._serializer.to_json(session)
        px = ttl_milliseconds(session.expires_in())
        with _backend_errors("store_session"):
            await self._client.set(key, payload, px=px)
        logger.debug("RedisSessionStore: stored session %r (px=%r)", key, px)
        return session.into_cookie_value()

    async def destroy_session(self, session: Session) -> None:
        key = self._key(session.id)
        with _backend_errors("destroy_session"):
            deleted = await self._client.delete(key)
        logger.debug("RedisSessionStore: destroyed %r (deleted=%r)", key, deleted)

    async def clear_store(self) -> None:
        with _backend_errors("clear_store"):
            if not self._namespace.is_prefixed:
                await self._client.flushall()
                logger.debug("RedisSessionStore: flushed the whole database")
                return
            ids = await self._ids()
            if ids is None:
                logger.debug("RedisSessionStore: nothing to clear")
                return
            await self._client.delete(*sorted(ids))
        logger.debug("RedisSessionStore: cleared %d session(s)", len(ids))

    async def count(self) -> int:
        with _backend_errors("count"):
            if not self._namespace.is_prefixed:
                return int(await self._client.dbsize())
            ids = await self._ids()
        return len(ids) if ids is not None else 0

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    async def ttl_for_session(self, session: Session) -> timedelta | None:
        """Return the remaining Redis TTL for ``session``.

        ``None`` means the key is missing or has no TTL.
        """
        with _backend_errors("ttl_for_session"):
            remaining = await self._client.pttl(self._key(session.id))
        if remaining is None or remaining < 0:
            return None
        return timedelta(milliseconds=remaining)

    async def aclose(self) -> None:
        """Close the underlying client and release its pool."""
        await self._client.aclose()

    def __repr__(self) -> str:
        return f"RedisSessionStore(prefix={self.prefix!r})"


__all__ = ["RedisSessionStore", "ttl_milliseconds"]
