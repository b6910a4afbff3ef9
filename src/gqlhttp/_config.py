from enum import Enum

from httpx import URL, InvalidURL
from pydantic import BaseModel, ConfigDict, field_validator


class EncodingMode(str, Enum):
    """How request bodies are serialized.

    A client uses exactly one mode for its whole lifetime.
    """

    JSON = "json"
    MULTIPART_FORM = "multipart_form"
    MULTIPART_REQUEST_SPEC = "multipart_request_spec"

    @property
    def supports_files(self) -> bool:
        return self is not EncodingMode.JSON


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    endpoint: str
    encoding: EncodingMode = EncodingMode.JSON
    close_connection: bool = False

    @field_validator("endpoint")
    @classmethod
    def _absolute_http_url(cls, value: str) -> str:
        try:
            url = URL(value)
        except InvalidURL as e:
            raise ValueError(f"invalid endpoint URL {value!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"endpoint must be an absolute http(s) URL, got {value!r}")
        return value
