from ._decoder import decode_response
from ._encoders import (
    ENCODERS,
    build_operations_and_map,
    encode,
    encode_json,
    encode_multipart_form,
    encode_multipart_request_spec,
)
from ._errors import encoding_errors
from ._request_spec import RequestSpec
from ._sanitize import preview, redact_headers
from ._ssl_context import get_httpx_client_kwargs

__all__ = [
    "ENCODERS",
    "RequestSpec",
    "build_operations_and_map",
    "decode_response",
    "encode",
    "encode_json",
    "encode_multipart_form",
    "encode_multipart_request_spec",
    "encoding_errors",
    "get_httpx_client_kwargs",
    "preview",
    "redact_headers",
]
