import ctypes

from ibeo import StructureMixin


class Point2D(StructureMixin, ctypes.LittleEndianStructure):
    _fields_ = [
        ('x', ctypes.c_int16),
        ('y', ctypes.c_int16),
    ]

    x: int
    y: int


class Size2D(StructureMixin, ctypes.LittleEndianStructure):
    _fields_ = [
        ('x', ctypes.c_uint16),
        ('y', ctypes.c_uint16),
    ]

    x: int
    y: int
