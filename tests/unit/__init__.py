"""Unit tests for individual components in isolation.

Coverage:
    - streaming/: Incremental decoding of streamed replies
    - gateway/: Configuration, payloads and upstream error mapping
    - client/: Session lifecycle, access checks and analysis parsing
"""
