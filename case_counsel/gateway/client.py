"""Upstream AI gateway client.

Forwards conversations to an OpenAI-compatible chat completions endpoint.
Chat requests are streamed back untouched; analysis requests return the
gateway's JSON body.

Upstream failures are mapped to ``GatewayError`` with the status code and
message the proxy should return:

    - 429 stays 429 (rate limited)
    - 402 stays 402 (credits exhausted)
    - anything else becomes 500 with a generic message; the upstream body
      is logged, never returned
"""

import logging
from typing import Any

import httpx

from case_counsel.gateway.config import GatewayConfig, get_gateway_config
from case_counsel.gateway.prompts import system_prompt_for
from case_counsel.models.schemas import ChatMessage, RequestType

logger = logging.getLogger(__name__)

_RATE_LIMITED = {
    "chat": "Rate limited. Please try again shortly.",
    "analyze": "Rate limited.",
}
_CREDITS_EXHAUSTED = {
    "chat": "Credits exhausted. Please add funds.",
    "analyze": "Credits exhausted.",
}
AI_SERVICE_ERROR = "AI service error"


class GatewayError(Exception):
    """Raised when the upstream gateway cannot serve a request."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def map_upstream_status(status_code: int, request_type: RequestType) -> GatewayError:
    """Translate a failed upstream status into the error the proxy returns."""
    if status_code == 429:
        return GatewayError(429, _RATE_LIMITED[request_type])
    if status_code == 402:
        return GatewayError(402, _CREDITS_EXHAUSTED[request_type])
    return GatewayError(500, AI_SERVICE_ERROR)


class GatewayClient:
    """Client for the AI completion gateway.

    Owns a single ``httpx.AsyncClient`` reused across requests. Pass
    ``http_client`` to supply a preconfigured client (custom transport,
    proxies); it is closed by ``aclose`` either way.
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_gateway_config()
        self._http = http_client or httpx.AsyncClient(timeout=self._config.timeout)

    @property
    def config(self) -> GatewayConfig:
        return self._config

    def build_payload(
        self,
        request_type: RequestType,
        messages: list[ChatMessage],
    ) -> dict[str, Any]:
        """Build the upstream request body.

        The system prompt for ``request_type`` is prepended to the
        conversation. Chat requests ask for a streamed reply.
        """
        payload: dict[str, Any] = {
            "model": self._config.model_name,
            "messages": [
                {"role": "system", "content": system_prompt_for(request_type)},
                *(m.model_dump() for m in messages),
            ],
        }
        if request_type == "chat":
            payload["stream"] = True
        return payload

    def _build_request(self, request_type: RequestType, messages: list[ChatMessage]) -> httpx.Request:
        return self._http.build_request(
            "POST",
            self._config.completions_url,
            headers={
                "Authorization": f"Bearer {self._config.api_key}",
                "Content-Type": "application/json",
            },
            json=self.build_payload(request_type, messages),
        )

    async def open_chat_stream(self, messages: list[ChatMessage]) -> httpx.Response:
        """Start a streamed chat completion.

        Args:
            messages: Conversation so far, without the system prompt.

        Returns:
            The open upstream response. The caller must ``aclose()`` it once
            the body has been relayed.

        Raises:
            GatewayError: If the gateway is unreachable or rejects the request.
        """
        request = self._build_request("chat", messages)
        try:
            response = await self._http.send(request, stream=True)
        except httpx.RequestError as e:
            logger.error(f"AI gateway request failed: {e}")
            raise GatewayError(500, f"AI gateway unreachable: {e}") from e

        if response.is_success:
            return response

        try:
            body = (await response.aread()).decode("utf-8", errors="replace")
        finally:
            await response.aclose()
        logger.error(f"AI error: {response.status_code} {body}")
        raise map_upstream_status(response.status_code, "chat")

    async def complete(self, messages: list[ChatMessage]) -> dict[str, Any]:
        """Run a non-streamed analysis completion.

        Args:
            messages: Conversation so far, without the system prompt.

        Returns:
            The gateway's JSON response.

        Raises:
            GatewayError: If the gateway is unreachable, rejects the request,
                or returns a body that is not JSON.
        """
        request = self._build_request("analyze", messages)
        try:
            response = await self._http.send(request)
        except httpx.RequestError as e:
            logger.error(f"AI gateway request failed: {e}")
            raise GatewayError(500, f"AI gateway unreachable: {e}") from e

        if not response.is_success:
            logger.error(f"AI error: {response.status_code} {response.text}")
            raise map_upstream_status(response.status_code, "analyze")

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"AI gateway returned invalid JSON: {e}")
            raise GatewayError(500, AI_SERVICE_ERROR) from e

    async def aclose(self) -> None:
        await self._http.aclose()


# Module-level singleton instance
_gateway_client: GatewayClient | None = None


async def get_gateway_client() -> GatewayClient:
    """Get or create the global gateway client.

    Uses singleton pattern so one connection pool serves all requests.
    Resolved on the event loop, so concurrent first requests share one
    instance.

    Returns:
        The GatewayClient instance.

    Raises:
        GatewayError: If the gateway configuration is incomplete.
    """
    global _gateway_client
    if _gateway_client is None:
        try:
            config = get_gateway_config()
        except ValueError as e:
            logger.error(f"Gateway configuration error: {e}")
            raise GatewayError(500, "AI_GATEWAY_API_KEY is not configured") from e
        _gateway_client = GatewayClient(config)
    return _gateway_client


async def close_gateway_client() -> None:
    """Close and forget the global gateway client, if one was created."""
    global _gateway_client
    if _gateway_client is not None:
        await _gateway_client.aclose()
        _gateway_client = None
