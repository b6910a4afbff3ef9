import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from logging import getLogger
from typing import Any, Callable, Dict, Optional

from httpx import AsyncClient, Client, Headers, Request, Response

from .._config import ClientConfig
from .._context import CallContext
from .._utils._request_spec import RequestSpec
from .._utils._sanitize import preview, redact_headers
from .._utils._ssl_context import get_httpx_client_kwargs
from .._utils.constants import (
    ACCEPT_JSON,
    HEADER_ACCEPT,
    HEADER_CONNECTION,
    HEADER_CONTENT_TYPE,
    LOGGER_NAME,
)
from ..models.errors import DeadlineExceededError, RequestCancelledError
from ..models.request import Request as GraphQLRequest


def _noop(_: str) -> None:
    pass


class BaseService:
    """Sends encoded GraphQL requests over httpx.

    Owns the httpx clients (built per instance unless injected), the debug
    logger and the caller's log sink. No retries are attempted: transport
    errors propagate as the httpx exceptions that caused them.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        http_client: Optional[Client] = None,
        async_http_client: Optional[AsyncClient] = None,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._config = config
        self._log_sink = log or _noop

        self._owns_client = http_client is None
        self._owns_client_async = async_http_client is None
        client_kwargs = (
            get_httpx_client_kwargs()
            if self._owns_client or self._owns_client_async
            else {}
        )
        self._client = http_client or Client(**client_kwargs)
        self._client_async = async_http_client or AsyncClient(**client_kwargs)
        self._executor = ThreadPoolExecutor(thread_name_prefix="gqlhttp")

        super().__init__()

    def _logf(self, message: str) -> None:
        self._logger.debug(message)
        try:
            self._log_sink(message)
        except Exception as e:
            self._logger.warning(f"Log sink raised {type(e).__name__}: {e}")

    @property
    def default_headers(self) -> Dict[str, str]:
        headers = {HEADER_ACCEPT: ACCEPT_JSON}
        if self._config.close_connection:
            headers[HEADER_CONNECTION] = "close"
        return headers

    def _build_request(
        self,
        client: Any,
        spec: RequestSpec,
        request: GraphQLRequest,
        context: CallContext,
    ) -> Request:
        kwargs: Dict[str, Any] = {
            "headers": {HEADER_CONTENT_TYPE: spec.content_type, **self.default_headers},
        }
        if spec.files:
            kwargs["files"] = spec.files
        else:
            kwargs["content"] = spec.content
        remaining = context.remaining()
        if remaining is not None:
            kwargs["timeout"] = remaining

        http_request = client.build_request(spec.method, self._config.endpoint, **kwargs)

        # caller headers are appended, never replacing what is already set
        http_request.headers = Headers(
            list(http_request.headers.raw) + request.header_items()
        )

        self._logf(f">> headers: {redact_headers(http_request.headers.multi_items())}")
        return http_request

    def _log_response(self, response: Response) -> None:
        self._logf(f"<< {preview(response.content.decode('utf-8', errors='replace'))}")

    def request(
        self,
        spec: RequestSpec,
        request: GraphQLRequest,
        context: CallContext,
    ) -> Response:
        """Send ``spec`` and return the response with its body fully read.

        The HTTP call runs on a worker thread so that cancelling ``context``
        from another thread, or reaching its deadline, returns control at once
        with RequestCancelledError or DeadlineExceededError. The abandoned call
        finishes in the background and its response is closed there.
        """
        context.check()
        http_request = self._build_request(self._client, spec, request, context)
        self._logger.debug(f"Request: {http_request.method} {http_request.url}")

        finished = threading.Event()
        future = self._executor.submit(self._send_and_read, http_request)
        future.add_done_callback(lambda _: finished.set())
        unregister = context.on_cancel(finished.set)
        try:
            finished.wait(context.remaining())
        finally:
            unregister()

        if context.cancelled:
            raise RequestCancelledError()
        if not future.done():
            raise DeadlineExceededError()

        response = future.result()
        self._log_response(response)
        return response

    def _send_and_read(self, http_request: Request) -> Response:
        response = self._client.send(http_request, stream=True)
        try:
            response.read()
        finally:
            response.close()
        return response

    async def request_async(
        self,
        spec: RequestSpec,
        request: GraphQLRequest,
        context: CallContext,
    ) -> Response:
        """Async version of request().

        Cancelling ``context`` while the call is in flight, or reaching its
        deadline, cancels the HTTP call and raises RequestCancelledError or
        DeadlineExceededError.
        """
        context.check()
        http_request = self._build_request(self._client_async, spec, request, context)
        self._logger.debug(f"Request: {http_request.method} {http_request.url}")

        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(self._send_and_read_async(http_request))
        unregister = context.on_cancel(lambda: loop.call_soon_threadsafe(task.cancel))
        try:
            response = await asyncio.wait_for(task, context.remaining())
        except asyncio.TimeoutError:
            raise DeadlineExceededError() from None
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if context.cancelled and not (current and current.cancelling()):
                raise RequestCancelledError() from None
            raise
        finally:
            unregister()

        self._log_response(response)
        return response

    async def _send_and_read_async(self, http_request: Request) -> Response:
        response = await self._client_async.send(http_request, stream=True)
        try:
            await response.aread()
        finally:
            await response.aclose()
        return response

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        if self._owns_client:
            self._client.close()

    async def aclose(self) -> None:
        if self._owns_client_async:
            await self._client_async.aclose()
        self.close()
