import ctypes
from dataclasses import dataclass
from typing import Any, Optional, Sequence, overload

from ibeo import StructureMixin, LittleEndianNtpTime, TruncatedPayloadError, CountMismatchError
from ibeo.typing import ReadableBuffer
from .geometry import Point2D, Size2D
from .. import logger


class ObjectDataHeader(StructureMixin, ctypes.LittleEndianStructure):
    _pack_ = 1
    _layout_ = "ms"
    _fields_ = [
        ('scan_start_timestamp', LittleEndianNtpTime),
        ('number_of_objects', ctypes.c_uint16),
    ]

    scan_start_timestamp: LittleEndianNtpTime
    number_of_objects: int


class ObjectInfoHeader(StructureMixin, ctypes.LittleEndianStructure):
    """
    fixed part of a tracked object, the contour points follow it
    """
    _fields_ = [
        ('object_id', ctypes.c_uint16),
        ('object_age', ctypes.c_uint16),
        ('object_prediction_age', ctypes.c_uint16),
        ('relative_timestamp', ctypes.c_uint16),
        ('reference_point', Point2D),
        ('reference_point_sigma', Point2D),
        ('closest_point', Point2D),
        ('bounding_box_center', Point2D),
        ('bounding_box_size', Size2D),
        ('object_box_center', Point2D),
        ('object_box_size', Size2D),
        ('object_box_orientation', ctypes.c_int16),
        ('absolute_velocity', Point2D),
        ('absolute_velocity_sigma', Size2D),
        ('relative_velocity', Point2D),
        ('reserved1', ctypes.c_uint16),
        ('reserved2', ctypes.c_uint16),
        ('reserved3', ctypes.c_uint16),
        ('number_of_contour_points', ctypes.c_uint16),
    ]

    object_id: int
    object_age: int
    object_prediction_age: int
    relative_timestamp: int
    reference_point: Point2D
    reference_point_sigma: Point2D
    closest_point: Point2D
    bounding_box_center: Point2D
    bounding_box_size: Size2D
    object_box_center: Point2D
    object_box_size: Size2D
    object_box_orientation: int
    absolute_velocity: Point2D
    absolute_velocity_sigma: Size2D
    relative_velocity: Point2D
    reserved1: int
    reserved2: int
    reserved3: int
    number_of_contour_points: int


OBJECT_DATA_HEADER_SIZE = ctypes.sizeof(ObjectDataHeader)
OBJECT_INFO_HEADER_SIZE = ctypes.sizeof(ObjectInfoHeader)
CONTOUR_POINT_SIZE = ctypes.sizeof(Point2D)


@dataclass(frozen=True)
class ObjectInfo:
    header: ObjectInfoHeader
    contour_points: tuple[Point2D, ...]

    @property
    def object_id(self) -> int:
        return self.header.object_id

    @property
    def size(self) -> int:
        return OBJECT_INFO_HEADER_SIZE + CONTOUR_POINT_SIZE * len(self.contour_points)

    def to_dict(self) -> dict[str, Any]:
        result = self.header.to_dict()
        result["contour_points"] = [point.to_dict() for point in self.contour_points]
        return result


@dataclass(frozen=True)
class ObjectData(Sequence[ObjectInfo]):
    header: ObjectDataHeader
    objects: tuple[ObjectInfo, ...]

    def __len__(self):
        return len(self.objects)

    @overload
    def __getitem__(self, i: slice) -> Sequence[ObjectInfo]: ...
    @overload
    def __getitem__(self, i: int) -> ObjectInfo: ...

    def __getitem__(self, i):
        return self.objects[i]

    @property
    def size(self) -> int:
        return OBJECT_DATA_HEADER_SIZE + sum(info.size for info in self.objects)

    def to_dict(self) -> dict[str, Any]:
        result = self.header.to_dict()
        result["objects"] = [info.to_dict() for info in self.objects]
        return result


def decode_object_info(buffer: ReadableBuffer, offset: int = 0) -> ObjectInfo:
    """
    decode the object starting at offset. its length is only known after reading the contour point count.
    :raise TruncatedPayloadError: the object runs past the end of buffer
    """
    available = len(buffer) - offset
    if available < OBJECT_INFO_HEADER_SIZE:
        raise TruncatedPayloadError("object header", OBJECT_INFO_HEADER_SIZE, available)
    header = ObjectInfoHeader.from_buffer_copy(buffer, offset)

    length = OBJECT_INFO_HEADER_SIZE + CONTOUR_POINT_SIZE * header.number_of_contour_points
    if length > available:
        raise TruncatedPayloadError(
            f"object {header.object_id} with {header.number_of_contour_points} contour points", length, available
        )
    contour_points = (Point2D * header.number_of_contour_points).from_buffer_copy(
        buffer, offset + OBJECT_INFO_HEADER_SIZE
    )
    return ObjectInfo(header, tuple(contour_points))


def decode_objects(buffer: ReadableBuffer, declared_object_count: Optional[int] = None) -> ObjectData:
    """
    decode an ObjectData payload: a 10-byte header followed by variable length objects, all little-endian.
    objects are walked in order, each one starts where the previous one ended.
    :param buffer: the payload
    :param declared_object_count: number of objects to read, defaults to the header's number_of_objects
    :raise TruncatedPayloadError: the header or an object runs past the end of buffer
    :raise CountMismatchError: buffer ends before the declared number of objects
    """
    if len(buffer) < OBJECT_DATA_HEADER_SIZE:
        raise TruncatedPayloadError("object data header", OBJECT_DATA_HEADER_SIZE, len(buffer))
    header = ObjectDataHeader.from_buffer_copy(buffer)
    if declared_object_count is None:
        declared_object_count = header.number_of_objects

    objects = []
    offset = OBJECT_DATA_HEADER_SIZE
    for _ in range(declared_object_count):
        if offset >= len(buffer):
            raise CountMismatchError(declared_object_count, len(objects))
        info = decode_object_info(buffer, offset)
        objects.append(info)
        offset += info.size

    if offset != len(buffer):
        logger.warning(f"{len(buffer) - offset} bytes left after {declared_object_count} objects")
    return ObjectData(header, tuple(objects))
