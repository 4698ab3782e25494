"""Assistant proxy endpoint.

Relays chat and analysis requests to the AI gateway. Chat replies are
streamed back as Server-Sent Events exactly as the gateway produced them.
"""

import logging

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.types import Receive, Scope, Send

from case_counsel.gateway.client import GatewayClient, get_gateway_client
from case_counsel.models.schemas import AssistantRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assistant"])


class UpstreamRelayResponse(StreamingResponse):
    """Streams an open upstream response body to the client.

    The upstream response is closed however the relay ends, including when
    the client disconnects mid-stream.
    """

    def __init__(self, upstream: httpx.Response, media_type: str = "text/event-stream") -> None:
        super().__init__(upstream.aiter_raw(), media_type=media_type)
        self.upstream = upstream

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.upstream.aclose()


@router.post("/analyze-case", response_model=None)
async def analyze_case(
    request: AssistantRequest,
    gateway: GatewayClient = Depends(get_gateway_client),
) -> StreamingResponse | JSONResponse:
    """Forward a conversation to the AI gateway.

    Args:
        request: Request type and conversation messages.
        gateway: Upstream gateway client.

    Returns:
        ``text/event-stream`` relay for ``chat``; the gateway's JSON for ``analyze``.

    Raises:
        GatewayError: Converted to ``{"error": ...}`` by the app's handler.
    """
    logger.info(f"Assistant request: type={request.type} messages={len(request.messages)}")

    if request.type == "chat":
        upstream = await gateway.open_chat_stream(request.messages)
        return UpstreamRelayResponse(upstream)

    data = await gateway.complete(request.messages)
    return JSONResponse(data)
