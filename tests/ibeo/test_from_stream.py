import io

import pytest

from ibeo import (
    from_stream, FrameParser, DataType, OpaquePayload, UnknownDataTypeError, InvalidMagicWordError,
    TruncatedHeaderError, TruncatedPayloadError, TransportClosedError, PayloadError,
)
from lux_frames import pack_frame, pack_header, ChunkedStream, COMMAND, OBJECT_DATA, SCAN_DATA


def upper_decoder(payload: bytes) -> bytes:
    if payload.startswith(b"!"):
        raise TruncatedPayloadError("test payload", 100, len(payload))
    return payload.upper()


@pytest.fixture
def parser() -> FrameParser:
    parser = FrameParser()
    parser.register_type(DataType.OBJECT_DATA, upper_decoder)
    return parser


def test_frames_in_order(parser):
    stream = io.BytesIO(
        pack_frame(OBJECT_DATA, b"first")
        + pack_frame(COMMAND, b"\x00\x01\x02")
        + pack_frame(OBJECT_DATA, b"second")
    )
    frames = list(from_stream(stream, parser))
    assert [frame.data_type for frame in frames] == [DataType.OBJECT_DATA, DataType.COMMAND, DataType.OBJECT_DATA]
    assert frames[0].payload == b"FIRST"
    assert frames[1].payload == OpaquePayload(DataType.COMMAND, 3)
    assert frames[1].is_opaque()
    assert frames[2].payload == b"SECOND"
    assert frames[0].raw_data == pack_frame(OBJECT_DATA, b"first")


def test_opaque_payload_is_drained(parser):
    stream = io.BytesIO(pack_frame(SCAN_DATA, b"x" * 5000) + pack_frame(OBJECT_DATA, b"after"))
    frames = list(from_stream(stream, parser))
    assert frames[0].payload == OpaquePayload(DataType.SCAN_DATA, 5000)
    assert frames[1].payload == b"AFTER"


def test_payload_split_over_reads(parser):
    data = pack_frame(OBJECT_DATA, b"abcdefghij" * 300)
    chunks = [data[:24], data[24:30], data[30:1500], data[1500:]]
    frames = list(from_stream(ChunkedStream(chunks), parser))
    assert len(frames) == 1
    assert frames[0].payload == b"ABCDEFGHIJ" * 300


def test_unknown_type_drops_header_block(parser):
    errors = []
    stream = io.BytesIO(pack_header(0, 0x9999) + pack_frame(OBJECT_DATA, b"ok"))
    frames = list(from_stream(stream, parser, errors.append))
    assert [frame.payload for frame in frames] == [b"OK"]
    assert len(errors) == 1
    assert isinstance(errors[0], UnknownDataTypeError)
    assert errors[0].code == 0x9999


def test_invalid_magic_word(parser):
    errors = []
    stream = io.BytesIO(pack_header(0, OBJECT_DATA, magic=0x12345678) + pack_frame(OBJECT_DATA, b"ok"))
    frames = list(from_stream(stream, parser, errors.append))
    assert [frame.payload for frame in frames] == [b"OK"]
    assert isinstance(errors[0], InvalidMagicWordError)
    assert errors[0].magic_word == 0x12345678


def test_short_header_read_is_dropped(parser):
    errors = []
    stream = ChunkedStream([b"\x00" * 10, pack_frame(OBJECT_DATA, b"ok")])
    frames = list(from_stream(stream, parser, errors.append))
    assert [frame.payload for frame in frames] == [b"OK"]
    assert isinstance(errors[0], TruncatedHeaderError)
    assert errors[0].size == 10


def test_payload_error_drops_frame(parser, caplog):
    errors = []
    stream = io.BytesIO(pack_frame(OBJECT_DATA, b"!broken") + pack_frame(OBJECT_DATA, b"ok"))
    with caplog.at_level("WARNING", logger="ibeo"):
        frames = list(from_stream(stream, parser, errors.append))
    assert [frame.payload for frame in frames] == [b"OK"]
    assert len(errors) == 1
    assert isinstance(errors[0], PayloadError)
    assert "skipped this OBJECT_DATA frame" in caplog.text


def test_errors_are_logged_without_handler(parser, caplog):
    stream = io.BytesIO(pack_header(0, 0x9999))
    with caplog.at_level("WARNING", logger="ibeo"):
        assert list(from_stream(stream, parser)) == []
    assert "unknown data type code 0x9999" in caplog.text


def test_stream_closed_inside_payload(parser):
    stream = io.BytesIO(pack_frame(OBJECT_DATA, b"complete") + pack_frame(OBJECT_DATA, b"incomplete")[:-3])
    frames = from_stream(stream, parser)
    assert next(frames).payload == b"COMPLETE"
    with pytest.raises(TransportClosedError):
        next(frames)


def test_closed_stream(parser):
    stream = io.BytesIO(pack_frame(OBJECT_DATA, b"ok"))
    stream.close()
    assert list(from_stream(stream, parser)) == []


def test_empty_stream(parser):
    assert list(from_stream(io.BytesIO(), parser)) == []
