"""A small GraphQL over HTTP client with file upload support.

Example:
    ```python
    from gqlhttp import GraphQLClient, Request

    client = GraphQLClient("https://example.com/graphql")
    req = Request("query ($key: String!) { items(id: $key) { field1 } }")
    req.var("key", "value")
    data = client.send(req, dict)
    ```
"""

from ._client import GraphQLClient
from ._config import ClientConfig, EncodingMode
from ._context import CallContext
from .models import (
    CancellationError,
    DeadlineExceededError,
    EncodingError,
    File,
    FilesNotSupportedError,
    GraphQLClientError,
    GraphQLError,
    GraphQLResponse,
    GraphQLServerError,
    PreconditionError,
    Request,
    RequestCancelledError,
    ResponseDecodeError,
    StatusCodeError,
    VariablesNotSupportedError,
)

__all__ = [
    "GraphQLClient",
    "ClientConfig",
    "EncodingMode",
    "CallContext",
    "Request",
    "File",
    "GraphQLError",
    "GraphQLResponse",
    "GraphQLClientError",
    "PreconditionError",
    "FilesNotSupportedError",
    "VariablesNotSupportedError",
    "EncodingError",
    "CancellationError",
    "RequestCancelledError",
    "DeadlineExceededError",
    "ResponseDecodeError",
    "StatusCodeError",
    "GraphQLServerError",
]
