"""FastAPI endpoints for the legal assistant.

HTTP and streaming routes with async request handling.
Relays Server-Sent Events from the AI gateway for real-time chat.

Endpoints:
    - GET /health: Service health status
    - POST /analyze-case: Streamed chat or one-shot case analysis
"""

from case_counsel.api.app import app, create_app

__all__ = ["app", "create_app"]
