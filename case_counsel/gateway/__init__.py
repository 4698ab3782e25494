"""Upstream AI gateway access.

Forwards chat and analysis conversations to the completion API.

Responsibilities:
    - Gateway configuration from the environment
    - System prompt selection per request type
    - Streamed and one-shot completion calls
    - Mapping upstream failures to proxy errors

Maintains clean separation from the HTTP layer.
"""

from case_counsel.gateway.client import (
    GatewayClient,
    GatewayError,
    close_gateway_client,
    get_gateway_client,
)
from case_counsel.gateway.config import GatewayConfig, get_gateway_config

__all__ = [
    "GatewayClient",
    "GatewayConfig",
    "GatewayError",
    "close_gateway_client",
    "get_gateway_client",
    "get_gateway_config",
]
