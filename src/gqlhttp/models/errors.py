from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .response import GraphQLError


class GraphQLClientError(Exception):
    """Base class for every error raised by gqlhttp itself.

    Transport failures are not wrapped: connection errors and timeouts surface
    as the ``httpx`` exceptions that caused them.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class PreconditionError(GraphQLClientError, ValueError):
    """The request cannot be sent with the configured encoding mode.

    Raised before any network activity.
    """


class FilesNotSupportedError(PreconditionError):
    def __init__(
        self,
        message="cannot send files with the JSON encoding; configure EncodingMode.MULTIPART_FORM or EncodingMode.MULTIPART_REQUEST_SPEC",
    ):
        super().__init__(message)


class VariablesNotSupportedError(PreconditionError):
    def __init__(
        self,
        message="variables are not supported by the multipart request spec encoding, see https://github.com/jaydenseric/graphql-multipart-request-spec/issues/22",
    ):
        super().__init__(message)


class EncodingError(GraphQLClientError):
    """Serializing the query, variables, operations or map failed."""


class CancellationError(GraphQLClientError):
    """The call context was cancelled or ran out of time."""


class RequestCancelledError(CancellationError):
    def __init__(self, message="request cancelled"):
        super().__init__(message)


class DeadlineExceededError(CancellationError):
    def __init__(self, message="request deadline exceeded"):
        super().__init__(message)


class ResponseDecodeError(GraphQLClientError):
    """A successful response carried a body that is not a GraphQL envelope."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(message)


class StatusCodeError(GraphQLClientError):
    """The server answered with a non-success status and an undecodable body.

    The body is usually an HTML or plain text error page from a proxy or the
    server itself, so the status code is the useful part.
    """

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"graphql: server returned a non-success status code: {status_code}"
        )


class GraphQLServerError(GraphQLClientError):
    """The server reported at least one error in the response envelope.

    Only the first error drives the message; the full list stays available on
    ``errors``. Any ``data`` sent alongside the errors is discarded.
    """

    def __init__(
        self, error: "GraphQLError", errors: Optional[List["GraphQLError"]] = None
    ):
        self.error = error
        self.errors = list(errors) if errors is not None else [error]
        super().__init__(error.message)

    def __str__(self) -> str:
        return f"graphql: {self.message}"
