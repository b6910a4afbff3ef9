from dataclasses import dataclass
from typing import IO, Any, Dict, List, Optional, Tuple, Union

FileContent = Union[IO[bytes], bytes]


@dataclass(frozen=True)
class File:
    """A file attached to a GraphQL request.

    Attributes:
        field: Name of the multipart part, and the key used in the request spec ``map``.
        name: Filename sent to the server.
        content: Binary stream (or bytes) read once when the request is sent.
    """

    field: str
    name: str
    content: FileContent


class Request:
    """A GraphQL request: query text, variables, file attachments and headers.

    Files are only accepted by clients configured with one of the multipart
    encodings. A request must not be passed to two concurrent sends since the
    attached streams are consumed by the first one.

    Examples:
        ```python
        from gqlhttp import Request

        req = Request("query ($key: String!) { items(id: $key) { field1 } }")
        req.var("key", "value")
        req.add_header("Authorization", "Bearer token")
        ```
    """

    def __init__(self, query: str) -> None:
        self._query = query
        self._variables: Optional[Dict[str, Any]] = None
        self._files: List[File] = []
        self.headers: Dict[str, List[str]] = {}

    @property
    def query(self) -> str:
        return self._query

    @property
    def variables(self) -> Dict[str, Any]:
        """A copy of the variables set so far, empty until the first ``var()``."""
        return dict(self._variables) if self._variables else {}

    @property
    def files(self) -> Tuple[File, ...]:
        return tuple(self._files)

    def var(self, name: str, value: Any) -> None:
        """Set a variable, overwriting any previous value for ``name``."""
        if self._variables is None:
            self._variables = {}
        self._variables[name] = value

    def file(self, field: str, name: str, content: FileContent) -> None:
        """Attach a file.

        Field names are not checked for uniqueness; duplicates are sent in the
        order they were added.
        """
        self._files.append(File(field=field, name=name, content=content))

    def add_header(self, name: str, value: str) -> None:
        """Append a header value, keeping values already set for ``name``."""
        self.headers.setdefault(name, []).append(value)

    def set_header(self, name: str, value: str) -> None:
        """Replace every value of ``name`` with ``value``."""
        self.headers[name] = [value]

    def header_items(self) -> List[Tuple[str, str]]:
        return [
            (name, value) for name, values in self.headers.items() for value in values
        ]

    def __repr__(self) -> str:
        return (
            f"Request(query={self._query!r}, "
            f"variables={sorted(self.variables)!r}, "
            f"files={[f.field for f in self._files]!r})"
        )
