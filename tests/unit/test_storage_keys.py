"""Unit tests for redis_session_store.storage.keys."""
from __future__ import annotations

import dataclasses

import pytest

from redis_session_store.storage.keys import KeyNamespace, escape_pattern


class TestKeyNamespacePhysicalKey:
    def test_no_prefix_returns_id(self) -> None:
        assert KeyNamespace().physical_key("abc") == "abc"

    def test_prefix_is_prepended(self) -> None:
        assert KeyNamespace("ns/").physical_key("abc") == "ns/abc"

    def test_empty_prefix_is_no_prefix(self) -> None:
        namespace = KeyNamespace("")
        assert namespace.prefix is None
        assert namespace.is_prefixed is False
        assert namespace.physical_key("abc") == "abc"

    def test_prefix_is_immutable(self) -> None:
        namespace = KeyNamespace("ns/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            namespace.prefix = "other/"  # type: ignore[misc]


class TestKeyNamespacePattern:
    def test_unprefixed_pattern_matches_everything(self) -> None:
        assert KeyNamespace().pattern() == "*"

    def test_prefixed_pattern(self) -> None:
        assert KeyNamespace("ns/").pattern() == "ns/*"

    def test_prefix_metacharacters_are_escaped(self) -> None:
        assert KeyNamespace("app[1]:").pattern() == "app\\[1\\]:*"

    def test_prefix_star_is_escaped(self) -> None:
        assert KeyNamespace("a*").pattern() == "a\\**"


class TestEscapePattern:
    @pytest.mark.parametrize(
        ("raw", "escaped"),
        [
            ("plain", "plain"),
            ("a?b", "a\\?b"),
            ("a\\b", "a\\\\b"),
            ("[x]", "\\[x\\]"),
        ],
    )
    def test_escape(self, raw: str, escaped: str) -> None:
        assert escape_pattern(raw) == escaped
