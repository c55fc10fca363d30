import logging

logger = logging.getLogger(__name__)

from .errors import (
    HeaderError, UnknownDataTypeError, TruncatedHeaderError, InvalidMagicWordError,
    PayloadError, TruncatedPayloadError, CountMismatchError,
    TransportError, TransportClosedError, TransportIOError,
)
from .structure import StructureMixin
from .ntp_time import NtpTime, LittleEndianNtpTime
from .frame_header import FrameHeader, DataType, MAGIC_WORD, HEADER_SIZE
from .frame import Frame, OpaquePayload
from .frame_parser import FrameParser
from .reassembler import read_exact_payload, READ_BYTES
from .from_stream import from_stream
from .time_sync import build_time_sync_frames, send_time_sync
