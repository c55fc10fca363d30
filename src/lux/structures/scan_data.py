import ctypes
from dataclasses import dataclass
from typing import Any, Optional, Sequence, overload

import numpy as np

from ibeo import StructureMixin, LittleEndianNtpTime, TruncatedPayloadError
from ibeo.typing import ReadableBuffer
from .. import logger


class ScanDataHeader(StructureMixin, ctypes.LittleEndianStructure):
    _pack_ = 1
    _layout_ = "ms"
    _fields_ = [
        ('scan_number', ctypes.c_uint16),
        ('scanner_status', ctypes.c_uint16),
        ('sync_phase_offset', ctypes.c_uint16),
        ('scan_start_time', LittleEndianNtpTime),
        ('scan_end_time', LittleEndianNtpTime),
        ('angle_ticks_per_rotation', ctypes.c_uint16),
        ('start_angle', ctypes.c_int16),
        ('end_angle', ctypes.c_int16),
        ('scan_points', ctypes.c_uint16),
        ('mounting_position_yaw_angle', ctypes.c_int16),
        ('mounting_position_pitch_angle', ctypes.c_int16),
        ('mounting_position_roll_angle', ctypes.c_int16),
        ('mounting_position_x', ctypes.c_int16),
        ('mounting_position_y', ctypes.c_int16),
        ('mounting_position_z', ctypes.c_int16),
        ('processing_flags', ctypes.c_uint16),
    ]

    scan_number: int
    scanner_status: int
    sync_phase_offset: int
    scan_start_time: LittleEndianNtpTime
    scan_end_time: LittleEndianNtpTime
    angle_ticks_per_rotation: int
    start_angle: int
    end_angle: int
    scan_points: int
    mounting_position_yaw_angle: int
    mounting_position_pitch_angle: int
    mounting_position_roll_angle: int
    mounting_position_x: int
    mounting_position_y: int
    mounting_position_z: int
    processing_flags: int


class ScanPoint(StructureMixin, ctypes.LittleEndianStructure):
    _fields_ = [
        ('layer_and_echo', ctypes.c_uint8),
        ('flags', ctypes.c_uint8),
        ('horizontal_angle', ctypes.c_int16),
        ('radial_distance', ctypes.c_uint16),
        ('echo_pulse_width', ctypes.c_uint16),
        ('reserved', ctypes.c_uint16),
    ]

    layer_and_echo: int
    flags: int
    horizontal_angle: int
    radial_distance: int
    echo_pulse_width: int
    reserved: int

    @property
    def layer(self) -> int:
        return self.layer_and_echo & 0x0F

    @property
    def echo(self) -> int:
        return self.layer_and_echo >> 4


SCAN_DATA_HEADER_SIZE = ctypes.sizeof(ScanDataHeader)
SCAN_POINT_SIZE = ctypes.sizeof(ScanPoint)

SCAN_POINT_DTYPE = np.dtype([
    ('layer_and_echo', 'u1'),
    ('flags', 'u1'),
    ('horizontal_angle', '<i2'),
    ('radial_distance', '<u2'),
    ('echo_pulse_width', '<u2'),
    ('reserved', '<u2'),
])


@dataclass(frozen=True)
class ScanData(Sequence[ScanPoint]):
    header: ScanDataHeader
    points: tuple[ScanPoint, ...]

    def __len__(self):
        return len(self.points)

    @overload
    def __getitem__(self, i: slice) -> Sequence[ScanPoint]: ...
    @overload
    def __getitem__(self, i: int) -> ScanPoint: ...

    def __getitem__(self, i):
        return self.points[i]

    @property
    def size(self) -> int:
        return SCAN_DATA_HEADER_SIZE + SCAN_POINT_SIZE * len(self.points)

    def to_numpy(self) -> np.ndarray:
        """
        points as a structured array with the wire field names
        """
        return np.frombuffer(b"".join(bytes(point) for point in self.points), dtype=SCAN_POINT_DTYPE)

    def to_dict(self) -> dict[str, Any]:
        result = self.header.to_dict()
        result["points"] = [point.to_dict() for point in self.points]
        return result


def decode_scan(buffer: ReadableBuffer, declared_point_count: Optional[int] = None) -> ScanData:
    """
    decode a ScanData payload: a 44-byte header followed by 10-byte scan points, all little-endian.
    :param buffer: the payload
    :param declared_point_count: number of points to read, defaults to the header's scan_points
    :raise TruncatedPayloadError: buffer can't hold the header and the points
    """
    if len(buffer) < SCAN_DATA_HEADER_SIZE:
        raise TruncatedPayloadError("scan data header", SCAN_DATA_HEADER_SIZE, len(buffer))
    header = ScanDataHeader.from_buffer_copy(buffer)
    if declared_point_count is None:
        declared_point_count = header.scan_points

    needed = SCAN_DATA_HEADER_SIZE + SCAN_POINT_SIZE * declared_point_count
    if len(buffer) < needed:
        raise TruncatedPayloadError(f"{declared_point_count} scan points", needed, len(buffer))

    points = (ScanPoint * declared_point_count).from_buffer_copy(buffer, SCAN_DATA_HEADER_SIZE)
    if len(buffer) != needed:
        logger.warning(f"{len(buffer) - needed} bytes left after {declared_point_count} scan points")
    return ScanData(header, tuple(points))
