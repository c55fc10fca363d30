from typing import BinaryIO, Iterator, Optional

from .errors import HeaderError, PayloadError, InvalidMagicWordError, TransportIOError
from .frame import Frame
from .frame_header import FrameHeader, HEADER_SIZE
from .frame_parser import FrameParser
from .reassembler import read_exact_payload, READ_BYTES
from .typing import ErrorHandler
from . import logger


def from_stream(
        stream: BinaryIO,
        parser: FrameParser,
        on_error: Optional[ErrorHandler] = None,
        read_bytes: int = READ_BYTES
) -> Iterator[Frame]:
    """
    turn a blocking byte stream into frames, in arrival order.

    A header read that is not exactly HEADER_SIZE bytes, a header that fails to decode and a header
    with a wrong magic word are dropped as a whole 24-byte block; the payload that may follow is not
    skipped, so a corrupted length field can leave the reader misaligned. Frames whose payload fails
    to decode are dropped whole. Dropped data is logged and handed to on_error.

    Iteration ends when the stream is closed at a frame boundary.
    :raise TransportClosedError: the stream ended inside a payload
    :raise TransportIOError: the stream failed
    """
    while not stream.closed:
        try:
            header_buffer = stream.read(HEADER_SIZE)
        except OSError as e:
            raise TransportIOError("failed to read a frame header") from e
        if not header_buffer:
            break

        try:
            header = FrameHeader.decode(header_buffer)
            if not header.is_valid():
                raise InvalidMagicWordError(header.magic_word)
        except HeaderError as e:
            _report(e, "header", on_error)
            continue

        # header block consumed, the payload belongs to this frame now
        payload = read_exact_payload(stream, header.size_of_message_data, read_bytes)
        try:
            frame = parser.parse(header, payload)
        except PayloadError as e:
            _report(e, f"{header.data_type.name} frame", on_error)
            continue
        logger.debug(f"got a {header.data_type.name} frame with {header.size_of_message_data} payload bytes")
        yield frame


def _report(error: Exception, what: str, on_error: Optional[ErrorHandler]) -> None:
    logger.warning(f"skipped this {what}: {error}")
    if on_error is not None:
        on_error(error)
