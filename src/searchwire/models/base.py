from __future__ import annotations

import io
from abc import ABC, abstractmethod
from typing import IO, Protocol, runtime_checkable

import httpx


@runtime_checkable
class Fireable(Protocol):
    """Anything that can be fired against the search cluster by a transport."""

    def method(self) -> str:
        ...

    def path(self) -> str:
        ...

    def values(self) -> httpx.QueryParams:
        ...

    def serialize(self, stream: IO[str]) -> None:
        ...

    def body(self) -> bytes:
        ...


@runtime_checkable
class BatchFireable(Fireable, Protocol):
    """A single operation that can also take part in a bulk body."""

    def serialize_batch_header(self, stream: IO[str]) -> None:
        ...


class Renderable(ABC):
    """Buffered counterpart of ``serialize`` for callers that need bytes."""

    @abstractmethod
    def serialize(self, stream: IO[str]) -> None:
        """Write the request body to ``stream``."""

    def body(self) -> bytes:
        buffer = io.StringIO()
        self.serialize(buffer)
        return buffer.getvalue().encode("utf-8")


__all__ = ["BatchFireable", "Fireable", "Renderable"]
