"""Session serialization with schema versioning.

The full session state (id, expiry, and data) is written as one JSON
document so that the expiry recorded inside the value always travels with
it.  A ``schema_version`` field is embedded in every document so that
future readers can perform migrations.

Classes
-------
- SessionSerializer   — serialize/deserialize Session to JSON
- SchemaVersionError  — unsupported ``schema_version`` in a stored document
"""
from __future__ import annotations

import json

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from redis_session_store.errors import CorruptSessionData, SerializationFailure
from redis_session_store.session.state import Session

SCHEMA_VERSION = "1.0"
_SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({SCHEMA_VERSION})


class SchemaVersionError(CorruptSessionData):
    """Raised when a stored document uses an unsupported schema version."""

    def __init__(self, version: str, key: str | None = None) -> None:
        self.version = version
        supported = ", ".join(sorted(_SUPPORTED_SCHEMA_VERSIONS))
        super().__init__(
            f"Unsupported schema version {version!r}. "
            f"Supported versions: {supported}",
            key=key,
        )


class SessionSerializer:
    """Serialize and deserialize ``Session`` objects.

    Stateless; one instance can be shared by any number of stores.
    """

    def to_json(self, session: Session) -> str:
        """Serialise a ``Session`` to a compact JSON string.

        Parameters
        ----------
        session:
            The session to serialise.

        Returns
        -------
        str
            JSON document with a ``schema_version`` field.

        Raises
        ------
        SerializationFailure
            If a data value is not JSON representable.
        """
        try:
            document = session.model_dump(mode="json")
            document["schema_version"] = SCHEMA_VERSION
            return json.dumps(document, separators=(",", ":"), allow_nan=False)
        except (PydanticSerializationError, TypeError, ValueError) as exc:
            raise SerializationFailure(session.id, str(exc)) from exc

    def from_json(self, raw: str | bytes, *, key: str | None = None) -> Session:
        """Deserialize a ``Session`` from a JSON document.

        Parameters
        ----------
        raw:
            Document previously produced by ``to_json``.
        key:
            Backend key the document was read from, used in error messages.

        Returns
        -------
        Session
            The reconstructed session.  It carries no cookie value.

        Raises
        ------
        SchemaVersionError
            If the ``schema_version`` field is not in the supported set.
        CorruptSessionData
            If ``raw`` is not valid JSON or does not describe a session.
        """
        try:
            document = json.loads(raw)
        except (UnicodeDecodeError, ValueError) as exc:
            raise CorruptSessionData(f"invalid JSON: {exc}", key=key) from exc
        if not isinstance(document, dict):
            raise CorruptSessionData(
                f"expected a JSON object, got {type(document).__name__}", key=key
            )

        version = str(document.pop("schema_version", ""))
        if version not in _SUPPORTED_SCHEMA_VERSIONS:
            raise SchemaVersionError(version, key=key)

        try:
            return Session.model_validate(document)
        except ValidationError as exc:
            raise CorruptSessionData(str(exc), key=key) from exc


__all__ = ["SCHEMA_VERSION", "SchemaVersionError", "SessionSerializer"]
