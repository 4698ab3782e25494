"""Client for the assistant proxy.

Responsibilities:
    - Streamed chat with per-fragment callbacks
    - "Explain in Detail" follow-ups
    - Structured case analysis
    - Access checks against an explicit user session
"""

from case_counsel.client.chat_client import (
    AnalysisError,
    AssistantClient,
    ChatTransportError,
    build_case_prompt,
    case_title,
    parse_analysis,
    strip_code_fences,
)
from case_counsel.client.config import ClientConfig, get_client_config
from case_counsel.client.session import (
    AccessBlockedError,
    SessionClosedError,
    SessionError,
    SubscriptionRequiredError,
    UserSession,
)

__all__ = [
    "AccessBlockedError",
    "AnalysisError",
    "AssistantClient",
    "ChatTransportError",
    "ClientConfig",
    "SessionClosedError",
    "SessionError",
    "SubscriptionRequiredError",
    "UserSession",
    "build_case_prompt",
    "case_title",
    "get_client_config",
    "parse_analysis",
    "strip_code_fences",
]
