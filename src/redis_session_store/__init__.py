"""redis-session-store — Redis persistence for expiring HTTP sessions.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import redis_session_store
>>> redis_session_store.__version__
'0.1.0'
"""
from __future__ import annotations

# Configuration and errors
from redis_session_store.config import RedisStoreConfig
from redis_session_store.errors import (
    BackendUnavailable,
    CorruptSessionData,
    InvalidCookie,
    SerializationFailure,
    SessionStoreError,
)

# Session core
from redis_session_store.session.serializer import SchemaVersionError, SessionSerializer
from redis_session_store.session.state import Session

# Stores
from redis_session_store.storage.base import SessionStore
from redis_session_store.storage.keys import KeyNamespace
from redis_session_store.storage.memory import MemorySessionStore
from redis_session_store.storage.redis import RedisSessionStore
from redis_session_store.storage.scan import KeyScanner

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Configuration
    "RedisStoreConfig",
    # Errors
    "BackendUnavailable",
    "CorruptSessionData",
    "InvalidCookie",
    "SchemaVersionError",
    "SerializationFailure",
    "SessionStoreError",
    # Session core
    "Session",
    "SessionSerializer",
    # Stores
    "KeyNamespace",
    "KeyScanner",
    "MemorySessionStore",
    "RedisSessionStore",
    "SessionStore",
]
