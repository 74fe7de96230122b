from .base import BatchFireable, Fireable, Renderable
from .batch import BulkIndexRequest, MultiSearchRequest
from .operations import (
    CreateRequest,
    DeleteRequest,
    DocumentRequest,
    IndexRequest,
    Operation,
    Request,
    SearchRequest,
    UpdateRequest,
    WriteRequest,
    parse_operation,
    parse_operations,
)

__all__ = [
    "BatchFireable",
    "BulkIndexRequest",
    "CreateRequest",
    "DeleteRequest",
    "DocumentRequest",
    "Fireable",
    "IndexRequest",
    "MultiSearchRequest",
    "Operation",
    "Renderable",
    "Request",
    "SearchRequest",
    "UpdateRequest",
    "WriteRequest",
    "parse_operation",
    "parse_operations",
]
