from .errors import (
    CancellationError,
    DeadlineExceededError,
    EncodingError,
    FilesNotSupportedError,
    GraphQLClientError,
    GraphQLServerError,
    PreconditionError,
    RequestCancelledError,
    ResponseDecodeError,
    StatusCodeError,
    VariablesNotSupportedError,
)
from .request import File, Request
from .response import GraphQLError, GraphQLResponse

__all__ = [
    "File",
    "Request",
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
