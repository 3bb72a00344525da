#!/usr/bin/env python3
"""Example: Redis store with a key prefix

Connects to Redis, stores a few sessions under a prefix, and shows how
``count`` and ``clear_store`` stay inside that namespace.

Usage:
    REDIS_SESSION_URL=redis://localhost:6379/0 python examples/02_redis_store.py

Requirements:
    pip install redis-session-store
    A running Redis server.
"""
from __future__ import annotations

import asyncio
from datetime import timedelta

from redis_session_store import BackendUnavailable, RedisSessionStore, RedisStoreConfig, Session


async def main() -> None:
    config = RedisStoreConfig.from_env().with_overrides(prefix="example/")
    store = RedisSessionStore.from_config(config)
    try:
        await store.clear_store()
        for minutes in (1, 5, 10):
            session = Session.new()
            session.expire_in(timedelta(minutes=minutes))
            await store.store_session(session)
            ttl = await store.ttl_for_session(session)
            print(f"  stored {session.id[:12]}... ttl={ttl}")

        print(f"Sessions under {store.prefix!r}: {await store.count()}")
        await store.clear_store()
        print(f"After clear_store: {await store.count()}")
    except BackendUnavailable as exc:
        print(f"Redis is not reachable: {exc}")
    finally:
        await store.aclose()


if __name__ == "__main__":
    asyncio.run(main())
