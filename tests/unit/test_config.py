"""Unit tests for redis_session_store.config.RedisStoreConfig."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from redis_session_store.config import RedisStoreConfig

_FIELDS = ("URL", "PREFIX", "MAX_CONNECTIONS", "SOCKET_TIMEOUT", "SCAN_PAGE_SIZE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _FIELDS:
        monkeypatch.delenv(f"REDIS_SESSION_{name}", raising=False)


class TestRedisStoreConfigDefaults:
    def test_defaults(self) -> None:
        config = RedisStoreConfig()
        assert config.url == "redis://localhost:6379/0"
        assert config.prefix is None
        assert config.max_connections is None
        assert config.socket_timeout is None
        assert config.scan_page_size == 100

    def test_empty_prefix_is_none(self) -> None:
        assert RedisStoreConfig(prefix="").prefix is None

    def test_is_frozen(self) -> None:
        config = RedisStoreConfig()
        with pytest.raises(ValidationError):
            config.prefix = "x:"  # type: ignore[misc]

    def test_rejects_zero_page_size(self) -> None:
        with pytest.raises(ValidationError):
            RedisStoreConfig(scan_page_size=0)


class TestRedisStoreConfigFromEnv:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_SESSION_URL", "redis://cache:6379/3")
        monkeypatch.setenv("REDIS_SESSION_PREFIX", "web/")
        monkeypatch.setenv("REDIS_SESSION_MAX_CONNECTIONS", "16")
        monkeypatch.setenv("REDIS_SESSION_SOCKET_TIMEOUT", "1.5")
        monkeypatch.setenv("REDIS_SESSION_SCAN_PAGE_SIZE", "500")
        config = RedisStoreConfig.from_env()
        assert config.url == "redis://cache:6379/3"
        assert config.prefix == "web/"
        assert config.max_connections == 16
        assert config.socket_timeout == 1.5
        assert config.scan_page_size == 500

    def test_missing_variables_keep_defaults(self) -> None:
        assert RedisStoreConfig.from_env() == RedisStoreConfig()

    def test_unrelated_variables_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PREFIX", "nope")
        assert RedisStoreConfig.from_env().prefix is None

    def test_empty_prefix_variable_is_none(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_SESSION_PREFIX", "")
        assert RedisStoreConfig.from_env().prefix is None

    def test_invalid_value_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_SESSION_MAX_CONNECTIONS", "lots")
        with pytest.raises(ValidationError):
            RedisStoreConfig.from_env()

    def test_keyword_arguments_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_SESSION_PREFIX", "env/")
        assert RedisStoreConfig(prefix="kw/").prefix == "kw/"


class TestWithOverrides:
    def test_applies_overrides(self) -> None:
        config = RedisStoreConfig().with_overrides(url="redis://other:6379/1", prefix="p:")
        assert config.url == "redis://other:6379/1"
        assert config.prefix == "p:"
        assert config.scan_page_size == 100

    def test_empty_prefix_override_is_none(self) -> None:
        assert RedisStoreConfig(prefix="p:").with_overrides(prefix="").prefix is None

    def test_overrides_are_validated(self) -> None:
        with pytest.raises(ValidationError):
            RedisStoreConfig().with_overrides(scan_page_size=0)


class TestConnectionKwargs:
    def test_minimal(self) -> None:
        assert RedisStoreConfig().connection_kwargs() == {"decode_responses": True}

    def test_with_pool_settings(self) -> None:
        config = RedisStoreConfig(max_connections=4, socket_timeout=0.5)
        assert config.connection_kwargs() == {
            "decode_responses": True,
            "max_connections": 4,
            "socket_timeout": 0.5,
        }
