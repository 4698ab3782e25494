"""Streaming response decoding.

Turns the byte stream of a chat completion into the growing assistant
reply, one callback per fragment.
"""

from case_counsel.streaming.decoder import (
    DATA_PREFIX,
    DONE_SENTINEL,
    DeltaCallback,
    StreamDecoder,
    decode_stream,
    extract_delta,
)

__all__ = [
    "DATA_PREFIX",
    "DONE_SENTINEL",
    "DeltaCallback",
    "StreamDecoder",
    "decode_stream",
    "extract_delta",
]
