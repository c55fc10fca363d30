import ctypes
import enum
from typing import Any, Optional

from .errors import UnknownDataTypeError, TruncatedHeaderError
from .ntp_time import NtpTime
from .structure import StructureMixin
from .typing import ReadableBuffer

MAGIC_WORD = 0xAFFEC0C2


class DataType(enum.IntEnum):
    COMMAND = 0x2010
    COMMAND_REPLY = 0x2020
    ERROR = 0x2030
    SCAN_DATA = 0x2202
    OBJECT_DATA = 0x2221
    MOVEMENT_DATA = 0x2805
    EGO_MOTION_DATA = 0x2850
    SENSOR_INFO = 0x7100

    @classmethod
    def from_code(cls, code: int) -> "DataType":
        try:
            return cls(code)
        except ValueError:
            raise UnknownDataTypeError(code) from None


class FrameHeader(StructureMixin, ctypes.BigEndianStructure):
    _fields_ = [
        ('magic_word', ctypes.c_uint32),
        ('size_of_previous_messages', ctypes.c_uint32),
        ('size_of_message_data', ctypes.c_uint32),
        ('reserved', ctypes.c_uint8),
        ('device_id', ctypes.c_uint8),
        ('data_type_code', ctypes.c_uint16),
        ('ntp_time', NtpTime),
    ]

    magic_word: int
    size_of_previous_messages: int
    size_of_message_data: int
    reserved: int
    device_id: int
    data_type_code: int
    ntp_time: NtpTime

    @property
    def data_type(self) -> DataType:
        return DataType.from_code(self.data_type_code)

    def is_valid(self) -> bool:
        return self.magic_word == MAGIC_WORD

    @classmethod
    def decode(cls, buffer: ReadableBuffer) -> "FrameHeader":
        """
        parse the first 24 bytes of buffer. the magic word is NOT checked here, see is_valid.
        :raise TruncatedHeaderError: buffer is shorter than a header
        :raise UnknownDataTypeError: the type code names no DataType
        """
        if len(buffer) < HEADER_SIZE:
            raise TruncatedHeaderError(len(buffer), HEADER_SIZE)
        header = cls.from_buffer_copy(buffer)
        DataType.from_code(header.data_type_code)
        return header

    def encode(self) -> bytes:
        return bytes(self)

    @classmethod
    def create(
            cls,
            data_type: DataType,
            size_of_message_data: int,
            *,
            size_of_previous_messages: int = 0,
            device_id: int = 1,
            ntp_time: Optional[NtpTime] = None,
            magic_word: int = MAGIC_WORD
    ) -> "FrameHeader":
        return cls(
            magic_word=magic_word,
            size_of_previous_messages=size_of_previous_messages,
            size_of_message_data=size_of_message_data,
            reserved=0,
            device_id=device_id,
            data_type_code=DataType(data_type).value,
            ntp_time=ntp_time if ntp_time is not None else NtpTime(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "magic_word": self.magic_word,
            "size_of_previous_messages": self.size_of_previous_messages,
            "size_of_message_data": self.size_of_message_data,
            "reserved": self.reserved,
            "device_id": self.device_id,
            "data_type": self.data_type.name,
            "ntp_time": self.ntp_time.to_dict(),
        }


HEADER_SIZE = ctypes.sizeof(FrameHeader)
