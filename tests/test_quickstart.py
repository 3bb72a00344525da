"""Test that the quickstart API from the package docstring works."""
from __future__ import annotations

import pytest


def test_quickstart_import() -> None:
    import redis_session_store

    assert redis_session_store.__version__ == "0.1.0"


def test_public_names_are_exported() -> None:
    import redis_session_store

    for name in redis_session_store.__all__:
        assert hasattr(redis_session_store, name), name


def test_error_hierarchy() -> None:
    from redis_session_store import (
        BackendUnavailable,
        CorruptSessionData,
        InvalidCookie,
        SerializationFailure,
        SessionStoreError,
    )

    for error in (BackendUnavailable, CorruptSessionData, InvalidCookie, SerializationFailure):
        assert issubclass(error, SessionStoreError)


@pytest.mark.asyncio
async def test_quickstart_store_and_load() -> None:
    from redis_session_store import MemorySessionStore, Session

    store = MemorySessionStore()
    session = Session.new()
    session.insert("user_id", 42)

    cookie_value = await store.store_session(session)
    restored = await store.load_session(cookie_value)

    assert restored is not None
    assert restored.get("user_id") == 42
