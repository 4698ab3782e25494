"""Shared builders for test data and the upstream gateway stand-in."""

import json
from typing import Any

import httpx


def make_sse_event(content: str) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}) + "\n"


class UpstreamStub:
    """Callable for ``httpx.MockTransport`` that records traffic.

    Replies with whatever was last configured through ``reply``. Every
    request received and response returned is kept for assertions.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []
        self._status = 200
        self._kwargs: dict[str, Any] = {"json": {}}
        self._error: Exception | None = None

    def reply(self, status: int = 200, **kwargs: Any) -> None:
        self._status = status
        self._kwargs = kwargs
        self._error = None

    def fail(self, error: Exception) -> None:
        self._error = error

    def stream_events(self, *contents: str, done: bool = True) -> None:
        body = "".join(make_sse_event(c) for c in contents)
        if done:
            body += "data: [DONE]\n\n"
        self.reply(200, content=body.encode("utf-8"), headers={"content-type": "text/event-stream"})

    @property
    def last_payload(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        response = httpx.Response(self._status, **self._kwargs)
        self.responses.append(response)
        return response
