"""Construction-time configuration for the Redis session store.

Settings are read from ``REDIS_SESSION_*`` environment variables by
pydantic-settings; keyword arguments take precedence over the environment.

Classes
-------
- RedisStoreConfig  — connection and namespace settings
"""
from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisStoreConfig(BaseSettings):
    """Settings used to build a ``RedisSessionStore``.

    Parameters
    ----------
    url:
        Redis connection URL.  Default: ``"redis://localhost:6379/0"``.
        Env: ``REDIS_SESSION_URL``.
    prefix:
        Optional key namespace.  When set, ``count`` and ``clear_store``
        only touch keys starting with it.  An empty string means no prefix.
        Env: ``REDIS_SESSION_PREFIX``.
    max_connections:
        Upper bound for the shared connection pool.  ``None`` uses the
        client library default.  Env: ``REDIS_SESSION_MAX_CONNECTIONS``.
    socket_timeout:
        Per-command socket timeout in seconds.  ``None`` waits indefinitely.
        Env: ``REDIS_SESSION_SOCKET_TIMEOUT``.
    scan_page_size:
        ``COUNT`` hint passed to each SCAN page.  Default: 100.
        Env: ``REDIS_SESSION_SCAN_PAGE_SIZE``.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDIS_SESSION_",
        case_sensitive=False,
        frozen=True,
    )

    url: str = "redis://localhost:6379/0"
    prefix: str | None = None
    max_connections: int | None = Field(default=None, ge=1)
    socket_timeout: float | None = Field(default=None, gt=0)
    scan_page_size: int = Field(default=100, ge=1)

    @field_validator("prefix")
    @classmethod
    def _empty_prefix_is_none(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def from_env(cls) -> RedisStoreConfig:
        """Build a config from the environment alone; unset variables keep defaults."""
        return cls()

    def with_overrides(self, **overrides: object) -> RedisStoreConfig:
        """Return a validated copy with ``overrides`` applied."""
        return type(self).model_validate({**self.model_dump(), **overrides})

    def connection_kwargs(self) -> dict[str, object]:
        """Return keyword arguments for ``redis.asyncio.Redis.from_url``."""
        kwargs: dict[str, object] = {"decode_responses": True}
        if self.max_connections is not None:
            kwargs["max_connections"] = self.max_connections
        if self.socket_timeout is not None:
            kwargs["socket_timeout"] = self.socket_timeout
        return kwargs


__all__ = ["RedisStoreConfig"]
