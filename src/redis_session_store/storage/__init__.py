"""Storage subpackage.

All stores implement the ``SessionStore`` ABC.

Public surface
--------------
- SessionStore        — abstract base class
- RedisSessionStore   — redis.asyncio-backed store with optional key prefix
- MemorySessionStore  — in-process dict (useful for testing)
- KeyNamespace        — prefix to physical-key mapping
- KeyScanner          — cursor-driven SCAN enumeration
"""
from __future__ import annotations

from redis_session_store.storage.base import SessionStore
from redis_session_store.storage.keys import KeyNamespace
from redis_session_store.storage.memory import MemorySessionStore
from redis_session_store.storage.redis import RedisSessionStore
from redis_session_store.storage.scan import KeyScanner

__all__ = [
    "KeyNamespace",
    "KeyScanner",
    "MemorySessionStore",
    "RedisSessionStore",
    "SessionStore",
]
