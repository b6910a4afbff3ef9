from contextlib import contextmanager
from typing import Generator

from ..models.errors import EncodingError


@contextmanager
def encoding_errors(what: str) -> Generator[None, None, None]:
    """Context manager converting serialization failures into EncodingError.

    Args:
        what: Short description of the value being serialized, used in the message.

    Raises:
        EncodingError: When the wrapped code raises TypeError or ValueError,
            which is what ``json.dumps`` raises for unsupported values.
    """
    try:
        yield
    except (TypeError, ValueError) as e:
        raise EncodingError(f"failed to encode {what}: {e}") from e
