#!/usr/bin/env python3
"""Example: Quickstart

Stores, loads, updates, and destroys a session with the in-memory store.
The same calls work unchanged against ``RedisSessionStore``.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install redis-session-store
"""
from __future__ import annotations

import asyncio
from datetime import timedelta

import redis_session_store
from redis_session_store import MemorySessionStore, Session


async def main() -> None:
    print(f"redis-session-store version: {redis_session_store.__version__}")
    store = MemorySessionStore()

    session = Session.new()
    session.insert("user", "alice")
    session.expire_in(timedelta(minutes=30))

    cookie_value = await store.store_session(session)
    print(f"Cookie to send to the client: {cookie_value[:16]}...")

    loaded = await store.load_session(cookie_value)
    print(f"Loaded session for user={loaded.get('user')!r}, expires in {loaded.expires_in()}")

    loaded.insert("visits", 1)
    # A loaded session has no new cookie to issue.
    print(f"Cookie after update: {await store.store_session(loaded)!r}")

    await store.destroy_session(loaded)
    print(f"After destroy: {await store.load_session(cookie_value)!r}")


if __name__ == "__main__":
    asyncio.run(main())
