"""Session subpackage.

Public surface
--------------
- Session            — identifier, data mapping, and optional expiry
- SessionSerializer  — JSON round-trip with schema versioning
- SchemaVersionError — unsupported schema version in a stored document
"""
from __future__ import annotations

from redis_session_store.session.serializer import SchemaVersionError, SessionSerializer
from redis_session_store.session.state import Session

__all__ = [
    "SchemaVersionError",
    "Session",
    "SessionSerializer",
]
