from __future__ import annotations

import json
from typing import IO, Any, Dict, Iterable, List

import httpx
from pydantic import BaseModel

from .errors import PayloadSerializationError, SerializationError


def to_query_params(value: Any) -> httpx.QueryParams:
    """Coerce mappings, pair lists or query strings into ``httpx.QueryParams``."""

    if value is None:
        return httpx.QueryParams()
    if isinstance(value, httpx.QueryParams):
        return value
    return httpx.QueryParams(value)


def merge_query_params(params: Iterable[httpx.QueryParams]) -> httpx.QueryParams:
    """Additive union: every key/value pair is kept, in the order given."""

    items: List[tuple[str, str]] = []
    for entry in params:
        items.extend(entry.multi_items())
    return httpx.QueryParams(items)


def flatten_query_params(params: httpx.QueryParams) -> Dict[str, str]:
    # one representative value per key, as a query string would be read
    return {key: params.get(key) for key in params.keys()}


def encode_line(value: Any, error: type[SerializationError] = PayloadSerializationError) -> str:
    """Render ``value`` as one compact JSON document without a trailing newline."""

    if isinstance(value, BaseModel):
        try:
            value = value.model_dump(mode="json")
        except (TypeError, ValueError) as exc:
            raise error(f"cannot serialize {type(value).__name__}: {exc}") from exc
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise error(f"cannot serialize {type(value).__name__}: {exc}") from exc


def write_line(stream: IO[str], line: str) -> None:
    stream.write(line)
    stream.write("\n")


def action_metadata(
    action: str,
    index: str,
    doc_type: str | None,
    doc_id: str | None,
    params: httpx.QueryParams,
) -> Dict[str, Dict[str, str]]:
    """Build the ``{action: {_index, _type, _id, ...}}`` bulk header.

    Unset ``_type`` and ``_id`` keys are left out rather than sent as empty
    strings, so the cluster assigns the id and applies its default type.
    """

    metadata: Dict[str, str] = {"_index": index}
    if doc_type:
        metadata["_type"] = doc_type
    if doc_id:
        metadata["_id"] = doc_id
    metadata.update(flatten_query_params(params))
    return {action: metadata}


__all__ = [
    "action_metadata",
    "encode_line",
    "flatten_query_params",
    "merge_query_params",
    "to_query_params",
    "write_line",
]
