"""Case Counsel - streaming legal assistant over an AI completion gateway.

Combines FastAPI for the SSE proxy, httpx for upstream and client
streaming, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and streaming relay
    - gateway: Upstream AI gateway access and error mapping
    - streaming: Incremental decoding of streamed replies
    - client: Proxy client with sessions and access checks
    - models: Request/response schemas
"""

__version__ = "0.1.0"
