from typing import Callable, Optional, Type, TypeVar

from httpx import AsyncClient, Client

from ._config import ClientConfig, EncodingMode
from ._context import CallContext
from ._services._base_service import BaseService
from ._utils._decoder import decode_response
from ._utils._encoders import encode
from ._utils._request_spec import RequestSpec
from .models.errors import FilesNotSupportedError
from .models.request import Request

T = TypeVar("T")


class GraphQLClient(BaseService):
    """Client for a GraphQL API reachable over HTTP.

    A client is safe to share between threads and tasks as long as every call
    gets its own Request. Its configuration is fixed at construction.

    Examples:
        ```python
        from pydantic import BaseModel

        from gqlhttp import GraphQLClient, Request


        class Hero(BaseModel):
            name: str


        class HeroData(BaseModel):
            hero: Hero


        client = GraphQLClient("https://example.com/graphql")
        data = client.send(Request("query { hero { name } }"), HeroData)
        print(data.hero.name)
        ```

        Uploading files:

        ```python
        client = GraphQLClient(
            "https://example.com/graphql", encoding=EncodingMode.MULTIPART_FORM
        )
        req = Request("mutation ($id: ID!) { attach(id: $id) }")
        req.var("id", "42")
        with open("report.pdf", "rb") as f:
            req.file("report", "report.pdf", f)
            client.send(req)
        ```
    """

    def __init__(
        self,
        endpoint: str,
        *,
        encoding: EncodingMode = EncodingMode.JSON,
        close_connection: bool = False,
        http_client: Optional[Client] = None,
        async_http_client: Optional[AsyncClient] = None,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        """Create a client.

        Args:
            endpoint: Absolute URL of the GraphQL endpoint.
            encoding: How request bodies are serialized. Files require one of the multipart modes.
            close_connection: Send ``Connection: close`` so connections are not reused.
            http_client: httpx client used by ``send``. Built per instance when omitted.
            async_http_client: httpx async client used by ``send_async``. Built per instance when omitted.
            log: Called with every diagnostic line (queries, headers, response bodies).

        Raises:
            pydantic.ValidationError: If ``endpoint`` is not an absolute http(s) URL.
        """
        config = ClientConfig(
            endpoint=endpoint, encoding=encoding, close_connection=close_connection
        )
        super().__init__(
            config,
            http_client=http_client,
            async_http_client=async_http_client,
            log=log,
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        http_client: Optional[Client] = None,
        async_http_client: Optional[AsyncClient] = None,
        log: Optional[Callable[[str], None]] = None,
    ) -> "GraphQLClient":
        return cls(
            config.endpoint,
            encoding=config.encoding,
            close_connection=config.close_connection,
            http_client=http_client,
            async_http_client=async_http_client,
            log=log,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    def _prepare(self, request: Request, context: CallContext) -> RequestSpec:
        context.check()
        if request.files and not self._config.encoding.supports_files:
            raise FilesNotSupportedError()
        return encode(self._config.encoding, request, self._logf)

    def send(
        self,
        request: Request,
        target: Optional[Type[T]] = None,
        *,
        context: Optional[CallContext] = None,
    ) -> Optional[T]:
        """Execute ``request`` and decode the ``data`` field of the response.

        Args:
            request: The request to send.
            target: Type ``data`` is validated as: a pydantic model, a dataclass,
                ``dict`` or any type pydantic can validate. Pass ``None`` to only
                check the response for errors.
            context: Cancellation and deadline for this call.

        Returns:
            The decoded data, or ``None`` when ``target`` is ``None``.

        Raises:
            PreconditionError: The request cannot be sent with the configured encoding.
            EncodingError: The query or variables could not be serialized.
            CancellationError: The context was cancelled or expired.
            httpx.TransportError: The HTTP call itself failed.
            StatusCodeError: Non-2xx response with a body that is not a GraphQL envelope.
            ResponseDecodeError: 2xx response with a body that is not a GraphQL envelope.
            GraphQLServerError: The server reported errors; the first one is raised.
        """
        context = context or CallContext()
        spec = self._prepare(request, context)
        response = self.request(spec, request, context)
        return decode_response(response.status_code, response.content, target)

    async def send_async(
        self,
        request: Request,
        target: Optional[Type[T]] = None,
        *,
        context: Optional[CallContext] = None,
    ) -> Optional[T]:
        """Async version of send()."""
        context = context or CallContext()
        spec = self._prepare(request, context)
        response = await self.request_async(spec, request, context)
        return decode_response(response.status_code, response.content, target)

    def __enter__(self) -> "GraphQLClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    async def __aenter__(self) -> "GraphQLClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
