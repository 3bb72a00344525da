"""Key namespacing.

Maps logical session identifiers to physical backend keys by prepending an
optional prefix, and builds the SCAN pattern that matches the namespace.

Classes
-------
- KeyNamespace  — immutable prefix plus key/pattern helpers
"""
from __future__ import annotations

import re
from dataclasses import dataclass

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def escape_pattern(text: str) -> str:
    """Escape SCAN MATCH glob metacharacters in ``text``."""
    return _GLOB_SPECIAL.sub(r"\\\1", text)


@dataclass(frozen=True)
class KeyNamespace:
    """An optional key prefix, fixed for the lifetime of a store.

    An empty prefix is treated as no prefix.

    Parameters
    ----------
    prefix:
        String prepended to every session id, or ``None``.
    """

    prefix: str | None = None

    def __post_init__(self) -> None:
        if not self.prefix:
            object.__setattr__(self, "prefix", None)

    @property
    def is_prefixed(self) -> bool:
        return self.prefix is not None

    def physical_key(self, session_id: str) -> str:
        """Return the backend key for ``session_id``."""
        if self.prefix is None:
            return session_id
        return f"{self.prefix}{session_id}"

    def pattern(self) -> str:
        """Return the SCAN pattern matching every key in this namespace.

        The prefix is escaped, so a prefix such as ``"app[1]:"`` matches
        only itself.
        """
        if self.prefix is None:
            return "*"
        return f"{escape_pattern(self.prefix)}*"


__all__ = ["KeyNamespace", "escape_pattern"]
