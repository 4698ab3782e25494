"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the upstream AI completion gateway.
Works with any OpenAI-compatible chat completions API via a custom base URL.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_BASE_URL = "https://ai.gateway.lovable.dev/v1"
DEFAULT_MODEL = "google/gemini-3-flash-preview"


class GatewayConfig(BaseModel):
    """Configuration for the AI completion gateway.

    Attributes:
        api_key: Bearer key for the gateway.
        base_url: API base URL; ``/chat/completions`` is appended.
        model_name: Model identifier to request.
        timeout: Upstream request timeout in seconds.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("AI_GATEWAY_API_KEY", ""),
        description="API key for the AI gateway",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv("AI_GATEWAY_BASE_URL") or DEFAULT_BASE_URL,
        description="Gateway base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("AI_GATEWAY_MODEL") or DEFAULT_MODEL,
        description="Model to use",
    )
    timeout: float = Field(
        default=120.0,
        gt=0.0,
        description="Upstream request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("AI_GATEWAY_API_KEY is not configured")
        return v.strip()

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def completions_url(self) -> str:
        return f"{self.base_url}/chat/completions"


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GatewayConfig()
