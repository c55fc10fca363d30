from typing import BinaryIO

from .errors import TransportClosedError, TransportIOError

READ_BYTES = 1024


def read_exact_payload(stream: BinaryIO, length: int, read_bytes: int = READ_BYTES) -> bytes:
    """
    collect exactly `length` bytes from a blocking stream, at most `read_bytes` per read.
    never asks for more than the remaining length; anything a source hands back beyond it is cut off.
    :raise TransportClosedError: the stream ended before the payload was complete
    :raise TransportIOError: the stream failed
    """
    payload = bytearray()
    while len(payload) < length:
        remaining = length - len(payload)
        try:
            chunk = stream.read(min(read_bytes, remaining))
        except OSError as e:
            raise TransportIOError(f"read failed after {len(payload)} of {length} payload bytes") from e
        if not chunk:
            raise TransportClosedError(f"stream closed after {len(payload)} of {length} payload bytes")
        payload += chunk[:remaining]
    return bytes(payload)
