from __future__ import annotations


class SerializationError(ValueError):
    """A request could not be rendered to JSON lines."""


class PayloadSerializationError(SerializationError):
    """The document or query payload is not JSON serializable."""


class HeaderSerializationError(SerializationError):
    """The batch header metadata is not JSON serializable."""


__all__ = [
    "HeaderSerializationError",
    "PayloadSerializationError",
    "SerializationError",
]
