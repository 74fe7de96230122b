from __future__ import annotations

import json
from abc import abstractmethod
from collections.abc import Iterable, Mapping
from typing import IO, Annotated, Any, ClassVar, List, Literal, Tuple, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from ..errors import HeaderSerializationError
from ..serialization import action_metadata, encode_line, to_query_params, write_line
from .base import Renderable


def _join_path(*segments: str | None) -> str:
    return "/".join(segment for segment in segments if segment)


class Request(BaseModel, Renderable):
    """Common shape of a single request against the search cluster."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    http_method: ClassVar[str]

    params: httpx.QueryParams = Field(default_factory=httpx.QueryParams)

    @field_validator("params", mode="before")
    @classmethod
    def coerce_params(cls, value: Any) -> httpx.QueryParams:
        return to_query_params(value)

    def method(self) -> str:
        return self.http_method

    @abstractmethod
    def path(self) -> str:
        """Endpoint path relative to the cluster root."""

    def values(self) -> httpx.QueryParams:
        return self.params

    @abstractmethod
    def body_line(self) -> str | None:
        """The rendered body line, or ``None`` when the request has no body."""

    def serialize(self, stream: IO[str]) -> None:
        line = self.body_line()
        if line is not None:
            write_line(stream, line)


class SearchRequest(Request):
    """Query one or more indices (and optionally types) with an opaque query body."""

    http_method: ClassVar[str] = "GET"

    op: Literal["search"] = "search"
    indices: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    query: Any = None

    def path(self) -> str:
        if self.indices and self.types:
            return f"/{','.join(self.indices)}/{','.join(self.types)}/_search"
        if self.indices:
            return f"/{','.join(self.indices)}/_search"
        if self.types:
            return f"/_all/{','.join(self.types)}/_search"
        return "/_search"

    def body_line(self) -> str:
        return encode_line(self.query)

    def header_line(self) -> str:
        header: dict[str, List[str]] = {}
        if self.indices:
            header["index"] = list(self.indices)
        if self.types:
            header["type"] = list(self.types)
        return encode_line(header, error=HeaderSerializationError)


class DocumentRequest(Request):
    """A write addressed to a single document by index, type and id."""

    action: ClassVar[str]
    path_suffix: ClassVar[str | None] = None

    index: str
    type: str | None = None
    id: str | None = None

    def path(self) -> str:
        return _join_path(self.index, self.type, self.id, self.path_suffix)

    def header_line(self) -> str:
        metadata = action_metadata(self.action, self.index, self.type, self.id, self.params)
        return encode_line(metadata, error=HeaderSerializationError)

    def serialize_batch_header(self, stream: IO[str]) -> None:
        write_line(stream, self.header_line())


class IndexRequest(DocumentRequest):
    """Insert or replace a document."""

    http_method: ClassVar[str] = "PUT"
    action: ClassVar[str] = "index"

    op: Literal["index"] = "index"
    source: Any = None

    def body_line(self) -> str:
        return encode_line(self.source)


class CreateRequest(DocumentRequest):
    """Insert a document; the cluster rejects it if the id already exists."""

    http_method: ClassVar[str] = "PUT"
    action: ClassVar[str] = "create"
    path_suffix: ClassVar[str | None] = "_create"

    op: Literal["create"] = "create"
    source: Any = None

    def body_line(self) -> str:
        return encode_line(self.source)


class UpdateRequest(DocumentRequest):
    """Partially update a document. ``source`` is the update body (``doc``, ``script``...)."""

    http_method: ClassVar[str] = "POST"
    action: ClassVar[str] = "update"
    path_suffix: ClassVar[str | None] = "_update"

    op: Literal["update"] = "update"
    source: Any = None

    def body_line(self) -> str:
        return encode_line(self.source)


class DeleteRequest(DocumentRequest):
    http_method: ClassVar[str] = "DELETE"
    action: ClassVar[str] = "delete"

    op: Literal["delete"] = "delete"

    def body_line(self) -> None:
        return None


WriteRequest = Annotated[
    Union[IndexRequest, CreateRequest, UpdateRequest, DeleteRequest],
    Field(discriminator="op"),
]

Operation = Annotated[
    Union[SearchRequest, IndexRequest, CreateRequest, UpdateRequest, DeleteRequest],
    Field(discriminator="op"),
]

_operation_adapter: TypeAdapter[Any] = TypeAdapter(Operation)


def parse_operation(data: Mapping[str, Any]) -> Request:
    """Validate a plain mapping such as ``{"op": "delete", "index": "foo", "id": "1"}``."""

    return _operation_adapter.validate_python(data)


def parse_operations(lines: Iterable[str]) -> List[Request]:
    """Parse one JSON operation descriptor per line, ignoring blank lines."""

    operations: List[Request] = []
    for line in lines:
        if not line.strip():
            continue
        operations.append(parse_operation(json.loads(line)))
    return operations


__all__ = [
    "CreateRequest",
    "DeleteRequest",
    "DocumentRequest",
    "IndexRequest",
    "Operation",
    "Request",
    "SearchRequest",
    "UpdateRequest",
    "WriteRequest",
    "parse_operation",
    "parse_operations",
]
