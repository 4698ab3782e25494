"""Incremental decoder for streamed chat completions.

Consumes the raw bytes of a ``text/event-stream`` response whose events are
``data: <json>`` lines in the OpenAI-compatible delta format, and turns them
into a growing assistant reply.
"""

import codecs
import json
import logging
from collections.abc import AsyncIterable, Callable
from typing import Any

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"

DeltaCallback = Callable[[str], None]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def extract_delta(event: Any) -> str | None:
    """Return ``choices[0].delta.content`` from a parsed event, if present."""
    if not isinstance(event, dict):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


class StreamDecoder:
    """Line-oriented decoder for one streamed reply.

    Bytes are decoded with an incremental UTF-8 decoder so multi-byte
    characters split across chunks survive; invalid bytes become U+FFFD.
    Complete lines are parsed as they appear; an incomplete trailing line
    waits in the buffer for the next chunk.

    The accumulated text only ever grows. Each non-empty fragment appends to
    it and the callback receives the whole accumulated text, not the
    fragment.

    A ``data:`` line whose payload is not strict JSON (``NaN`` and
    ``Infinity`` are rejected) is pushed back to the front of the buffer
    and parsing stops until more bytes arrive. A complete line that is
    simply malformed therefore blocks every line behind it for the rest of
    the stream.
    """

    def __init__(self, on_delta: DeltaCallback | None = None) -> None:
        self._on_delta = on_delta
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._text = ""

    @property
    def text(self) -> str:
        """The accumulated reply so far."""
        return self._text

    @property
    def pending(self) -> str:
        """Decoded text not yet resolved into a complete line."""
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        """Process one chunk of bytes.

        Args:
            chunk: Raw bytes from the transport.

        Returns:
            The accumulated text after each fragment found in this chunk,
            in arrival order.
        """
        self._buffer += self._decoder.decode(chunk)
        updates: list[str] = []

        while (idx := self._buffer.find("\n")) != -1:
            line = self._buffer[:idx]
            self._buffer = self._buffer[idx + 1 :]
            if line.endswith("\r"):
                line = line[:-1]
            if not line.startswith(DATA_PREFIX):
                continue

            payload = line[len(DATA_PREFIX) :].strip()
            if payload == DONE_SENTINEL:
                break

            try:
                event = json.loads(payload, parse_constant=_reject_constant)
            except ValueError:
                logger.warning(f"Unparseable stream payload, waiting for more data: {payload[:80]!r}")
                self._buffer = line + "\n" + self._buffer
                break

            fragment = extract_delta(event)
            if fragment:
                self._text += fragment
                updates.append(self._text)
                if self._on_delta is not None:
                    self._on_delta(self._text)

        return updates


async def decode_stream(
    source: AsyncIterable[bytes],
    on_delta: DeltaCallback | None = None,
) -> str:
    """Decode a whole event stream.

    Args:
        source: Async iterable of raw byte chunks, e.g. ``response.aiter_bytes()``.
        on_delta: Called with the accumulated text after every fragment.

    Returns:
        The final accumulated reply once the source is exhausted.
    """
    decoder = StreamDecoder(on_delta)
    async for chunk in source:
        decoder.feed(chunk)
    return decoder.text
