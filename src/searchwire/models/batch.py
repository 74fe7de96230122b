from __future__ import annotations

from typing import IO, Iterator, Tuple

import httpx
from pydantic import ConfigDict, RootModel

from shared.logging import get_logger

from ..errors import SerializationError
from ..serialization import merge_query_params, write_line
from .base import Renderable
from .operations import SearchRequest, WriteRequest

logger = get_logger("searchwire.batch")


class MultiSearchRequest(RootModel[Tuple[SearchRequest, ...]], Renderable):
    """Several searches sent as one ``/_msearch`` body.

    Serialization is best effort: a member whose header or body cannot be
    rendered is logged and left out, and the rest of the batch is still
    written.
    """

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[SearchRequest]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def method(self) -> str:
        return "GET"

    def path(self) -> str:
        return "/_msearch"

    def values(self) -> httpx.QueryParams:
        return merge_query_params(request.values() for request in self.root)

    def serialize(self, stream: IO[str]) -> None:
        written = False
        for position, request in enumerate(self.root):
            try:
                header = request.header_line()
            except SerializationError as exc:
                logger.warning("msearch_member_skipped", position=position, stage="header", error=str(exc))
                continue
            try:
                body = request.body_line()
            except SerializationError as exc:
                logger.warning("msearch_member_skipped", position=position, stage="body", error=str(exc))
                continue
            write_line(stream, header)
            write_line(stream, body)
            written = True

        # an empty body is still newline-terminated
        if not written:
            stream.write("\n")


class BulkIndexRequest(RootModel[Tuple[WriteRequest, ...]], Renderable):
    """Index, create, update and delete documents in one ``/_bulk`` body.

    Serialization is strict: the first member that fails to render aborts the
    whole body and the error reaches the caller. Whatever was already written
    to the stream must be discarded.
    """

    model_config = ConfigDict(frozen=True)

    def __iter__(self) -> Iterator[WriteRequest]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def method(self) -> str:
        return "POST"

    def path(self) -> str:
        return "/_bulk"

    def values(self) -> httpx.QueryParams:
        return httpx.QueryParams()

    def serialize(self, stream: IO[str]) -> None:
        for request in self.root:
            request.serialize_batch_header(stream)
            request.serialize(stream)


__all__ = ["BulkIndexRequest", "MultiSearchRequest"]
