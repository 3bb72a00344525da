"""Cursor-driven key enumeration.

Redis answers SCAN in bounded pages tied together by a cursor.  ``KeyScanner``
drives that cursor from the fresh value (0) until the server returns 0
again, and either exposes the pages lazily or collects them into one set.

The result is not a point-in-time snapshot.  Keys written after the scan
starts may or may not be reported, and keys deleted mid-scan may still
appear in a page that was already fetched.  Callers must not treat the
result as linearizable.

Classes
-------
- KeyScanner  — paginated SCAN MATCH/TYPE over one pattern
"""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any

logger = logging.getLogger(__name__)

_FRESH_CURSOR = 0


class KeyScanner:
    """Enumerate keys matching ``pattern`` through repeated SCAN calls.

    Parameters
    ----------
    client:
        A ``redis.asyncio.Redis`` (or compatible) client.
    pattern:
        Glob pattern passed as ``MATCH``.
    page_size:
        ``COUNT`` hint for each page.  Default: 100.
    key_type:
        Restrict results to this Redis type.  Default: ``"string"``.
    """

    def __init__(
        self,
        client: Any,
        pattern: str,
        *,
        page_size: int = 100,
        key_type: str | None = "string",
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self._client = client
        self._pattern = pattern
        self._page_size = page_size
        self._key_type = key_type

    @property
    def pattern(self) -> str:
        return self._pattern

    async def pages(self) -> AsyncIterator[list[str]]:
        """Yield each SCAN page's keys until the cursor is exhausted.

        Every call starts a new scan from the fresh cursor.  A failing page
        request propagates out of the iterator unchanged.
        """
        cursor: int = _FRESH_CURSOR
        page_number = 0
        while True:
            cursor, keys = await self._client.scan(
                cursor=cursor,
                match=self._pattern,
                count=self._page_size,
                _type=self._key_type,
            )
            page_number += 1
            yield [_as_str(key) for key in keys]
            if int(cursor) == _FRESH_CURSOR:
                break
        logger.debug(
            "KeyScanner: scanned %r in %d page(s)", self._pattern, page_number
        )

    async def collect(self) -> frozenset[str] | None:
        """Run a full scan and return every matched key.

        Returns
        -------
        frozenset[str] | None
            The matched keys, or ``None`` when nothing matched.  If any page
            fails the exception propagates and no partial result is kept.
        """
        found: set[str] = set()
        async for page in self.pages():
            found.update(page)
        return frozenset(found) if found else None

    def __repr__(self) -> str:
        return (
            f"KeyScanner(pattern={self._pattern!r}, page_size={self._page_size}, "
            f"key_type={self._key_type!r})"
        )


def _as_str(key: str | bytes) -> str:
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return key


__all__ = ["KeyScanner"]
