"""Integration tests for components working together as a system.

Coverage:
    - API endpoints through ASGITransport
    - AssistantClient against the in-process proxy
    - Streamed chat, case analysis and error mapping end to end
"""
