from __future__ import annotations

import io
import json

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from searchwire import (
    BulkIndexRequest,
    CreateRequest,
    DeleteRequest,
    HeaderSerializationError,
    IndexRequest,
    MultiSearchRequest,
    PayloadSerializationError,
    SearchRequest,
    UpdateRequest,
)


def _line(value: object) -> str:
    return json.dumps(value, separators=(",", ":")) + "\n"


def _serialize(request) -> str:
    buffer = io.StringIO()
    request.serialize(buffer)
    return buffer.getvalue()


class BrokenHeaderSearch(SearchRequest):
    def header_line(self) -> str:
        raise HeaderSerializationError("header unavailable")


def test_bulk_index_request() -> None:
    index = IndexRequest(index="foo", type="bar", id="123", params={"refresh": "true"}, source={"name": "John"})
    delete = DeleteRequest(index="foo", type="bar", id="321")
    request = BulkIndexRequest([index, delete])

    assert request.method() == "POST"
    assert request.path() == "/_bulk"

    expected = (
        _line({"index": {"_index": "foo", "_type": "bar", "_id": "123", "refresh": "true"}})
        + _line({"name": "John"})
        + _line({"delete": {"_index": "foo", "_type": "bar", "_id": "321"}})
    )
    assert _serialize(request) == expected


def test_bulk_line_count_pairs_headers_with_bodies() -> None:
    source = {"name": "John", "age": 24}
    request = BulkIndexRequest(
        [
            IndexRequest(index="foo", type="bar", id="123", params={"refresh": True}, source=source),
            DeleteRequest(index="foo", type="bar", id="321"),
        ]
    )

    lines = _serialize(request).splitlines()
    assert len(lines) == 3
    assert json.loads(lines[0])["index"]["refresh"] == "true"
    assert json.loads(lines[1]) == source
    assert json.loads(lines[2]) == {"delete": {"_index": "foo", "_type": "bar", "_id": "321"}}


def test_bulk_preserves_member_order_across_variants() -> None:
    request = BulkIndexRequest(
        [
            UpdateRequest(index="i", type="t", id="1", source={"doc": {"a": 1}}),
            CreateRequest(index="i", type="t", id="2", source={"b": 2}),
            DeleteRequest(index="i", type="t", id="3"),
            IndexRequest(index="i", type="t", id="4", source={"c": 3}),
        ]
    )

    lines = [json.loads(line) for line in _serialize(request).splitlines()]
    assert lines == [
        {"update": {"_index": "i", "_type": "t", "_id": "1"}},
        {"doc": {"a": 1}},
        {"create": {"_index": "i", "_type": "t", "_id": "2"}},
        {"b": 2},
        {"delete": {"_index": "i", "_type": "t", "_id": "3"}},
        {"index": {"_index": "i", "_type": "t", "_id": "4"}},
        {"c": 3},
    ]
    assert len(request) == 4


def test_bulk_values_are_always_empty() -> None:
    request = BulkIndexRequest(
        [
            IndexRequest(index="foo", type="bar", id="1", params={"refresh": "true"}, source={}),
            DeleteRequest(index="foo", type="bar", id="2", params={"routing": "x"}),
        ]
    )

    assert str(request.values()) == ""


def test_bulk_aborts_on_first_failure() -> None:
    good = IndexRequest(index="foo", type="bar", id="1", source={"ok": True})
    bad = IndexRequest(index="foo", type="bar", id="2", source={"score": float("nan")})
    after = DeleteRequest(index="foo", type="bar", id="3")
    request = BulkIndexRequest([good, bad, after])

    buffer = io.StringIO()
    with pytest.raises(PayloadSerializationError):
        request.serialize(buffer)

    # partial output up to and including the failing member's header
    lines = buffer.getvalue().splitlines()
    assert len(lines) == 3
    assert json.loads(lines[2])["index"]["_id"] == "2"
    assert '"3"' not in buffer.getvalue()


def test_bulk_rejects_search_members() -> None:
    with pytest.raises(ValidationError):
        BulkIndexRequest([SearchRequest(indices=["foo"])])


def test_multi_search_request() -> None:
    first = SearchRequest(indices=["foo"], types=["bar"], query={"query": {"match_all": {}}})
    second = SearchRequest(query={"size": 0})
    request = MultiSearchRequest([first, second])

    assert request.method() == "GET"
    assert request.path() == "/_msearch"

    expected = (
        _line({"index": ["foo"], "type": ["bar"]})
        + _line({"query": {"match_all": {}}})
        + _line({})
        + _line({"size": 0})
    )
    assert _serialize(request) == expected


def test_multi_search_values_are_additive() -> None:
    request = MultiSearchRequest(
        [
            SearchRequest(params={"routing": "a", "preference": "_local"}),
            SearchRequest(),
            SearchRequest(params={"routing": "b"}),
        ]
    )

    values = request.values()
    assert values.get_list("routing") == ["a", "b"]
    assert values.get_list("preference") == ["_local"]
    assert sorted(values.multi_items()) == [("preference", "_local"), ("routing", "a"), ("routing", "b")]


def test_multi_search_skips_member_with_bad_body() -> None:
    good = SearchRequest(indices=["foo"], query={"query": {"match_all": {}}})
    bad = SearchRequest(indices=["bar"], query={"score": float("nan")})

    with capture_logs() as logs:
        output = _serialize(MultiSearchRequest([good, bad]))

    assert output == _line({"index": ["foo"]}) + _line({"query": {"match_all": {}}})
    assert len(logs) == 1
    assert logs[0]["event"] == "msearch_member_skipped"
    assert logs[0]["log_level"] == "warning"
    assert logs[0]["position"] == 1
    assert logs[0]["stage"] == "body"


def test_multi_search_skips_member_with_bad_header() -> None:
    broken = BrokenHeaderSearch(indices=["foo"], query={"size": 1})
    good = SearchRequest(indices=["bar"], query={"size": 2})

    with capture_logs() as logs:
        output = _serialize(MultiSearchRequest([broken, good]))

    assert output == _line({"index": ["bar"]}) + _line({"size": 2})
    assert [(entry["position"], entry["stage"]) for entry in logs] == [(0, "header")]


def test_multi_search_keeps_trailing_newline_when_everything_is_skipped() -> None:
    bad = SearchRequest(query={"tags": {"a"}})

    with capture_logs():
        assert _serialize(MultiSearchRequest([bad])) == "\n"
    assert _serialize(MultiSearchRequest([])) == "\n"


def test_batch_serialization_is_idempotent() -> None:
    request = MultiSearchRequest([SearchRequest(indices=["a", "b"], query={"size": 3})])

    assert request.body() == request.body()
    assert request.body() == _serialize(request).encode("utf-8")
