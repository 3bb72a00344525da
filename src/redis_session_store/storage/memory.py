"""In-memory session store.

Keeps serialized sessions in a plain Python dict guarded by
``asyncio.Lock``.  All data is lost when the process exits.  This store is
primarily useful for tests and local prototyping.

Expiry is enforced lazily: an expired session is dropped the next time it
is loaded, and ``count`` skips expired sessions.

Classes
-------
- MemorySessionStore  — dict-backed ephemeral ``SessionStore``
"""
from __future__ import annotations

import asyncio
import logging

from redis_session_store.session.serializer import SessionSerializer
from redis_session_store.session.state import Session
from redis_session_store.storage.base import SessionStore

logger = logging.getLogger(__name__)


class MemorySessionStore(SessionStore):
    """Ephemeral in-process session store.

    Parameters
    ----------
    initial_data:
        Optional pre-populated mapping of session ids to serialized
        sessions.  A shallow copy is taken so the caller's dict is not
        mutated.
    """

    def __init__(self, initial_data: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial_data or {})
        self._lock: asyncio.Lock = asyncio.Lock()
        self._serializer = SessionSerializer()

    # ------------------------------------------------------------------
    # SessionStore interface
    # ------------------------------------------------------------------

    async def load_session(self, cookie_value: str) -> Session | None:
        session_id = Session.id_from_cookie_value(cookie_value)
        async with self._lock:
            raw = self._store.get(session_id)
            if raw is None:
                return None
            session = self._serializer.from_json(raw, key=session_id)
            if session.is_expired:
                del self._store[session_id]
                logger.debug("MemorySessionStore: dropped expired session %r", session_id)
                return None
        return session

    async def store_session(self, session: Session) -> str | None:
        raw = self._serializer.to_json(session)
        async with self._lock:
            self._store[session.id] = raw
        return session.into_cookie_value()

    async def destroy_session(self, session: Session) -> None:
        async with self._lock:
            self._store.pop(session.id, None)

    async def clear_store(self) -> None:
        async with self._lock:
            self._store.clear()

    async def count(self) -> int:
        async with self._lock:
            return sum(
                1
                for session_id, raw in self._store.items()
                if not self._serializer.from_json(raw, key=session_id).is_expired
            )

    # ------------------------------------------------------------------
    # Extras
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._store)

    def __repr__(self) -> str:
        return f"MemorySessionStore(sessions={len(self._store)})"


__all__ = ["MemorySessionStore"]
