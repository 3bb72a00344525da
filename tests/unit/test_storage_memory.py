"""Unit tests for redis_session_store.storage.memory.MemorySessionStore."""
from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from redis_session_store.errors import CorruptSessionData, InvalidCookie
from redis_session_store.session.serializer import SessionSerializer
from redis_session_store.session.state import Session
from redis_session_store.storage.memory import MemorySessionStore


class TestMemorySessionStoreCrud:
    @pytest.mark.asyncio
    async def test_store_and_load(self) -> None:
        store = MemorySessionStore()
        session = Session.new()
        session.insert("key", "value")
        cookie = await store.store_session(session)
        loaded = await store.load_session(cookie)
        assert loaded is not None
        assert loaded.id == session.id
        assert loaded.get("key") == "value"

    @pytest.mark.asyncio
    async def test_load_missing_returns_none(self) -> None:
        store = MemorySessionStore()
        assert await store.load_session(Session.new().cookie_value) is None

    @pytest.mark.asyncio
    async def test_load_invalid_cookie_raises(self) -> None:
        with pytest.raises(InvalidCookie):
            await MemorySessionStore().load_session("!!")

    @pytest.mark.asyncio
    async def test_loaded_session_is_a_copy(self) -> None:
        store = MemorySessionStore()
        session = Session.new()
        cookie = await store.store_session(session)
        loaded = await store.load_session(cookie)
        loaded.insert("key", "changed")
        again = await store.load_session(cookie)
        assert again.get("key") is None

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self) -> None:
        store = MemorySessionStore()
        session = Session.new()
        cookie = await store.store_session(session)
        await store.destroy_session(session)
        await store.destroy_session(session)
        assert await store.load_session(cookie) is None

    @pytest.mark.asyncio
    async def test_clear_and_count(self) -> None:
        store = MemorySessionStore()
        for _ in range(3):
            await store.store_session(Session.new())
        assert await store.count() == 3
        await store.clear_store()
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_corrupt_initial_data_raises(self) -> None:
        session = Session.new()
        store = MemorySessionStore(initial_data={session.id: "garbage"})
        with pytest.raises(CorruptSessionData):
            await store.load_session(session.cookie_value)

    @pytest.mark.asyncio
    async def test_initial_data_is_copied(self) -> None:
        session = Session.new()
        initial = {session.id: SessionSerializer().to_json(session)}
        store = MemorySessionStore(initial_data=initial)
        await store.clear_store()
        assert session.id in initial


class TestMemorySessionStoreExpiry:
    @pytest.mark.asyncio
    async def test_expired_session_is_dropped_on_load(self) -> None:
        store = MemorySessionStore()
        session = Session.new()
        session.expire_in(timedelta(seconds=-1))
        cookie = await store.store_session(session)
        assert len(store) == 1
        assert await store.load_session(cookie) is None
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_count_skips_expired(self) -> None:
        store = MemorySessionStore()
        live = Session.new()
        dead = Session.new()
        dead.expire_in(timedelta(seconds=-1))
        await store.store_session(live)
        await store.store_session(dead)
        assert await store.count() == 1


class TestMemorySessionStoreConcurrency:
    @pytest.mark.asyncio
    async def test_concurrent_stores(self) -> None:
        store = MemorySessionStore()
        sessions = [Session.new() for _ in range(25)]
        await asyncio.gather(*(store.store_session(s) for s in sessions))
        assert await store.count() == 25

    def test_repr(self) -> None:
        assert "sessions=0" in repr(MemorySessionStore())
