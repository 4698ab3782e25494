"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - sse_event: Builds one ``data: {json}`` line carrying a delta fragment
    - upstream: Programmable stand-in for the AI gateway
    - gateway: GatewayClient wired to the upstream stand-in
    - app: FastAPI app using that gateway
    - async_client: HTTPX client for API testing
    - assistant_client: AssistantClient talking to the app in-process

The upstream gateway is the only replaced component; everything between
the client and the gateway is the real code.
"""

from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from case_counsel.api.app import create_app
from case_counsel.client.chat_client import AssistantClient
from case_counsel.client.config import ClientConfig
from case_counsel.gateway.client import GatewayClient, get_gateway_client
from case_counsel.gateway.config import GatewayConfig
from tests.helpers import UpstreamStub, make_sse_event


@pytest.fixture
def sse_event() -> Callable[[str], str]:
    """Return the SSE line builder."""
    return make_sse_event


@pytest.fixture
def upstream() -> UpstreamStub:
    """Return a fresh upstream gateway stand-in."""
    return UpstreamStub()


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(
        api_key="test-gateway-key",
        base_url="https://gateway.test/v1",
        model_name="test-model",
    )


@pytest.fixture
async def gateway(
    upstream: UpstreamStub, gateway_config: GatewayConfig
) -> AsyncGenerator[GatewayClient]:
    """Create a GatewayClient whose HTTP traffic goes to the upstream stand-in.

    Yields:
        GatewayClient closed after the test.
    """
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    client = GatewayClient(gateway_config, http_client=http_client)
    yield client
    await client.aclose()


@pytest.fixture
def app(gateway: GatewayClient) -> FastAPI:
    """Create the API with the gateway dependency overridden."""
    application = create_app()
    application.dependency_overrides[get_gateway_client] = lambda: gateway
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(
        function_url="http://test/analyze-case",
        publishable_key="pk-test",
        timeout=5.0,
    )


@pytest.fixture
async def assistant_client(
    app: FastAPI, client_config: ClientConfig
) -> AsyncGenerator[AssistantClient]:
    """Create an AssistantClient that reaches the app in-process.

    Yields:
        AssistantClient closed after the test.
    """
    http_client = AsyncClient(transport=ASGITransport(app=app))
    async with AssistantClient(client_config, http_client=http_client) as client:
        yield client
