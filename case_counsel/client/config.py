"""Client configuration with environment variable loading."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for talking to the assistant proxy.

    Attributes:
        function_url: Full URL of the ``analyze-case`` endpoint.
        publishable_key: Public key sent as the bearer token.
        timeout: Request timeout in seconds.
    """

    function_url: str = Field(
        default_factory=lambda: os.getenv(
            "CASE_COUNSEL_FUNCTION_URL", "http://localhost:8000/analyze-case"
        ),
        description="Assistant proxy endpoint",
    )
    publishable_key: str = Field(
        default_factory=lambda: os.getenv("CASE_COUNSEL_PUBLISHABLE_KEY", ""),
        description="Publishable key used as bearer token",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("CASE_COUNSEL_TIMEOUT", "120")),
        gt=0.0,
        description="Request timeout in seconds",
    )

    @field_validator("function_url")
    @classmethod
    def validate_function_url(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("function_url must be an http(s) URL")
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment."""
    return ClientConfig()
