"""
the two command frames that set the device clock: one carries the NTP seconds, one the fraction.
"""
import ctypes
from typing import BinaryIO, Optional

from .frame_header import FrameHeader, DataType
from .ntp_time import NtpTime
from .structure import StructureMixin
from . import logger

SET_NTP_SECONDS = 0x0030
SET_NTP_FRACTION = 0x0031


class SetNtpCommand(StructureMixin, ctypes.LittleEndianStructure):
    _pack_ = 1
    _layout_ = "ms"
    _fields_ = [
        ('command', ctypes.c_uint32),
        ('reserved', ctypes.c_uint16),
        ('value', ctypes.c_uint32),
    ]

    command: int
    reserved: int
    value: int


def build_time_sync_frames(ntp_time: NtpTime, device_id: int = 1) -> list[bytes]:
    header = FrameHeader.create(DataType.COMMAND, ctypes.sizeof(SetNtpCommand), device_id=device_id)
    return [
        header.encode() + bytes(SetNtpCommand(command=command, reserved=0, value=value))
        for command, value in ((SET_NTP_SECONDS, ntp_time.seconds), (SET_NTP_FRACTION, ntp_time.fraction))
    ]


def send_time_sync(stream: BinaryIO, ntp_time: Optional[NtpTime] = None, device_id: int = 1) -> NtpTime:
    """
    write the clock commands to an open binary stream. uses the current time if ntp_time is None.
    """
    if ntp_time is None:
        ntp_time = NtpTime.now()
    for frame in build_time_sync_frames(ntp_time, device_id):
        stream.write(frame)
    stream.flush()
    logger.info(f"device clock set to {ntp_time.to_datetime64()}")
    return ntp_time
