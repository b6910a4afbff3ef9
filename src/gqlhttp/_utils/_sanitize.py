"""Redaction helpers for debug logging of requests and responses."""

from typing import Iterable, List, Tuple

from .constants import SENSITIVE_HEADERS

MASK = "***"
PREVIEW_LIMIT = 2000


def redact_headers(headers: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """Mask the values of credential-carrying headers.

    Examples:
        >>> redact_headers([("Authorization", "Bearer abc"), ("Accept", "*/*")])
        [('Authorization', '***'), ('Accept', '*/*')]
    """
    return [
        (name, MASK if name.lower() in SENSITIVE_HEADERS else value)
        for name, value in headers
    ]


def preview(text: str, limit: int = PREVIEW_LIMIT) -> str:
    """Truncate ``text`` to ``limit`` characters for logging.

    Examples:
        >>> preview("abcdef", limit=3)
        'abc... (6 chars)'
    """
    if len(text) <= limit:
        return text
    return f"{text[:limit]}... ({len(text)} chars)"
