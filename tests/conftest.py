from typing import Generator, List

import httpx
import pytest

from gqlhttp import EncodingMode, GraphQLClient


@pytest.fixture
def endpoint() -> str:
    return "https://example.com/graphql"


@pytest.fixture
def log_lines() -> List[str]:
    return []


@pytest.fixture
def make_client(endpoint: str, log_lines: List[str]) -> Generator:
    clients: List[GraphQLClient] = []

    def factory(
        encoding: EncodingMode = EncodingMode.JSON, **kwargs
    ) -> GraphQLClient:
        kwargs.setdefault("http_client", httpx.Client())
        kwargs.setdefault("async_http_client", httpx.AsyncClient())
        kwargs.setdefault("log", log_lines.append)
        client = GraphQLClient(endpoint, encoding=encoding, **kwargs)
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()
        client._client.close()


@pytest.fixture
def client(make_client) -> GraphQLClient:
    return make_client()
