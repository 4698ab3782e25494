"""Test package for Case Counsel.

Unit tests for isolated logic and integration tests for the request path
from client through proxy to the AI gateway.

Structure:
    - unit/: Individual function and class tests
    - integration/: End-to-end workflow tests

The AI gateway is the only external service and is always replaced by an
httpx.MockTransport stand-in. Leverages pytest with pytest-check for soft
assertions.
"""
