from typing import Any, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..models.errors import GraphQLServerError, ResponseDecodeError, StatusCodeError
from ..models.response import GraphQLResponse

T = TypeVar("T")


def _decode_failure(status_code: int, body: bytes, e: ValidationError) -> Exception:
    text = body.decode("utf-8", errors="replace")
    if not 200 <= status_code < 300:
        return StatusCodeError(status_code, text)
    return ResponseDecodeError(f"failed to decode response: {e}", text)


def decode_response(
    status_code: int, body: bytes, target: Optional[Type[T]] = None
) -> Optional[T]:
    """Decode a GraphQL response body and surface errors.

    The envelope is decoded untyped first, so server errors are reported even
    when the partial ``data`` next to them does not fit ``target``.

    Args:
        status_code: HTTP status code of the response.
        body: The full response body.
        target: Type the ``data`` slot is validated as. ``None`` still decodes
            the envelope to look for errors but returns nothing.

    Returns:
        The validated ``data`` slot, or ``None`` when ``target`` is ``None``.

    Raises:
        StatusCodeError: The body is not a GraphQL envelope, or its data does
            not fit ``target``, and the status is not 2xx.
        ResponseDecodeError: Same failures, with a 2xx status.
        GraphQLServerError: The envelope carries errors. The first one is
            raised whatever the state of ``data``.
    """
    try:
        envelope = GraphQLResponse[Any].model_validate_json(body)
    except ValidationError as e:
        raise _decode_failure(status_code, body, e) from e

    if envelope.errors:
        raise GraphQLServerError(envelope.errors[0], envelope.errors)

    if target is None or envelope.data is None:
        return None

    try:
        return TypeAdapter(target).validate_python(envelope.data)
    except ValidationError as e:
        raise _decode_failure(status_code, body, e) from e
