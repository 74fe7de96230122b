from .errors import HeaderSerializationError, PayloadSerializationError, SerializationError
from .models import (
    BatchFireable,
    BulkIndexRequest,
    CreateRequest,
    DeleteRequest,
    Fireable,
    IndexRequest,
    MultiSearchRequest,
    SearchRequest,
    UpdateRequest,
    parse_operation,
    parse_operations,
)
from .sdk import RequestBuilder, prepare_request

__all__ = [
    "BatchFireable",
    "BulkIndexRequest",
    "CreateRequest",
    "DeleteRequest",
    "Fireable",
    "HeaderSerializationError",
    "IndexRequest",
    "MultiSearchRequest",
    "PayloadSerializationError",
    "RequestBuilder",
    "SearchRequest",
    "SerializationError",
    "UpdateRequest",
    "parse_operation",
    "parse_operations",
    "prepare_request",
]
